import enum


class ExpenseStatus(str, enum.Enum):
    """Settlement state of an expense.

    Used in Expense DTOs and for filtering expense lists.
    """
    PENDING = "pending"
    SETTLED = "settled"

    @property
    def display_name(self):
        return self.value.capitalize()


class PaymentMethod(str, enum.Enum):
    """How an expense was paid."""
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CHECK = "check"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    OTHER = "other"

    @property
    def display_name(self):
        return self.value.replace('_', ' ').title()


class RecurringFrequency(str, enum.Enum):
    """Recurrence frequency for recurring expenses."""
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def display_name(self):
        if self is RecurringFrequency.BIWEEKLY:
            return "Bi-weekly"
        return self.value.capitalize()


class BudgetType(str, enum.Enum):
    """Budgeting styles.

    An envelope budget divides income into named category allocations;
    a traditional budget tracks a single total.
    """
    ENVELOPE = "envelope"
    TRADITIONAL = "traditional"


class BudgetPeriod(str, enum.Enum):
    """Budget period lengths."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def display_name(self):
        return self.value.capitalize()


class ResourceType(str, enum.Enum):
    """Document types for household resources."""
    EMERGENCY = "emergency"
    EVACUATION_PLAN = "evacuation_plan"
    FIRE_EXTINGUISHER = "fire_extinguisher"
    HOME_WARRANTY = "home_warranty"
    OTHER = "other"
    RENTAL_AGREEMENT = "rental_agreement"


class ResourceStatus(str, enum.Enum):
    """Status values for household resources."""
    ACTIVE = "active"
    ARCHIVED = "archived"
    EXPIRED = "expired"
    PENDING = "pending"


class LegalDocumentType(str, enum.Enum):
    """Legal document types stored against a family circle."""
    MEDICAL_DIRECTIVE = "medical_directive"
    OTHER = "other"
    POWER_OF_ATTORNEY = "power_of_attorney"
    TRUST = "trust"
    WILL = "will"


class LegalDocumentStatus(str, enum.Enum):
    """Lifecycle status of a legal document."""
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    SUPERSEDED = "superseded"


class MemberDocumentType(str, enum.Enum):
    """Identity documents a family member can hold (one of each)."""
    BIRTH_CERTIFICATE = "birth_certificate"
    DRIVERS_LICENSE = "drivers_license"
    PASSPORT = "passport"
    SOCIAL_SECURITY = "social_security"


class MemberRecordKind(str, enum.Enum):
    """Child record collections owned by a family member.

    The value is the URL segment under /family-circles/{id}/members/{id}/.
    """
    ALLERGY = "allergies"
    CONDITION = "conditions"
    DOCUMENT = "documents"
    EMERGENCY_CONTACT = "emergency-contacts"
    MEDICATION = "medications"
    PROVIDER = "providers"
    SCHOOL_RECORD = "school-records"
    VACCINATION = "vaccinations"

    @property
    def label(self):
        return {
            MemberRecordKind.ALLERGY: "allergy",
            MemberRecordKind.CONDITION: "medical condition",
            MemberRecordKind.DOCUMENT: "document",
            MemberRecordKind.EMERGENCY_CONTACT: "emergency contact",
            MemberRecordKind.MEDICATION: "medication",
            MemberRecordKind.PROVIDER: "healthcare provider",
            MemberRecordKind.SCHOOL_RECORD: "school record",
            MemberRecordKind.VACCINATION: "vaccination",
        }[self]


class GoalType(str, enum.Enum):
    """How a goal is tracked: done once, repeated as a habit, or counted towards a target."""
    ONE_TIME = "one_time"
    HABIT = "habit"
    MILESTONE = "milestone"

    @property
    def display_name(self):
        return {
            GoalType.ONE_TIME: "One-time",
            GoalType.HABIT: "Habit",
            GoalType.MILESTONE: "Milestone",
        }[self]


class GoalStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class TaskStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class RewardType(str, enum.Enum):
    """Rewards a kid goal can pay out."""
    STICKER = "sticker"
    POINTS = "points"
    TREAT = "treat"
    OUTING = "outing"
    CUSTOM = "custom"


class ShoppingCategory(str, enum.Enum):
    """Aisle groupings for shopping list items."""
    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    BAKERY = "bakery"
    FROZEN = "frozen"
    BEVERAGES = "beverages"
    SNACKS = "snacks"
    HOUSEHOLD = "household"
    PHARMACY = "pharmacy"
    OTHER = "other"

    @property
    def display_name(self):
        return self.value.capitalize()


class ViewState(str, enum.Enum):
    """Display phase derived from a view-model's loading/error fields."""
    EMPTY = "empty"
    ERROR = "error"
    LOADED = "loaded"
    LOADING = "loading"
