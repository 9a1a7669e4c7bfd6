"""Pydantic schemas mirroring the backend JSON payloads.

JSON keys are snake_case and map one-to-one onto attribute names. Every
response DTO ignores unknown keys and treats absent optional keys as None.
Request bodies serialize through ``to_payload()``, which omits unset optionals.

Decoding goes through ``parse_model``/``parse_list`` rather than calling
``model_validate`` directly, so malformed server data comes back as a
``ParseResult`` carrying the error messages instead of raising mid-screen.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from shared.enums import (
    BudgetPeriod, BudgetType, ExpenseStatus, GoalType, LegalDocumentStatus, LegalDocumentType,
    MemberDocumentType, PaymentMethod, RecurringFrequency, ResourceStatus, ResourceType, RewardType,
    ShoppingCategory, TaskStatus,
)
from shared.utils import (
    blood_type_display_name, format_display_date, insurance_type_name, progress_fraction,
    strip_html,
)

T = TypeVar('T')


class LedgerModel(BaseModel):
    """Base for every DTO: lenient about extra keys, strict about types."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with None-valued optionals omitted."""
        return self.model_dump(mode='json', exclude_none=True)


class IdentifiedModel(LedgerModel):
    """DTO whose equality is its identifier.

    Two instances of the same class compare equal when their ``id`` values
    match, regardless of any other field. Records without an id (embedded
    documents) are only equal to themselves.
    """

    id: int

    def __eq__(self, other):
        if not isinstance(other, IdentifiedModel):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return type(self) is type(other) and self.id == other.id

    def __hash__(self):
        if self.id is None:
            return object.__hash__(self)
        return hash((type(self).__name__, self.id))


@dataclass
class ParseResult(Generic[T]):
    """Outcome of decoding a payload.

    ``value`` is None when decoding failed; ``errors`` may be non-empty even
    on success when lenient nested sections had to be dropped.
    """
    value: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None


def _format_errors(exc: PydanticValidationError, prefix: str = '') -> List[str]:
    messages = []
    for err in exc.errors():
        loc = '.'.join(str(part) for part in err.get('loc', ()))
        if prefix:
            loc = f"{prefix}.{loc}" if loc else prefix
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get('msg'))
    return messages


def parse_model(model, payload) -> ParseResult:
    """Decode ``payload`` into ``model``.

    Models may declare ``lenient_fields``; a lenient field that fails to
    validate is removed from the payload and reported in ``errors`` while the
    rest of the model still decodes.
    """
    if not isinstance(payload, dict):
        return ParseResult(errors=[f"{model.__name__}: expected an object, got {type(payload).__name__}"])

    payload = dict(payload)
    errors = []
    for name in getattr(model, 'lenient_fields', ()):
        if payload.get(name) is None:
            continue
        adapter = TypeAdapter(model.model_fields[name].annotation)
        try:
            adapter.validate_python(payload[name])
        except PydanticValidationError as e:
            errors.extend(_format_errors(e, prefix=f"{name} (dropped)"))
            payload.pop(name)

    try:
        return ParseResult(value=model.model_validate(payload), errors=errors)
    except PydanticValidationError as e:
        errors.extend(_format_errors(e))
        return ParseResult(errors=errors)


def parse_list(model, payload) -> ParseResult:
    """Decode a JSON array of ``model`` objects; any bad element fails the whole list."""
    if not isinstance(payload, list):
        return ParseResult(errors=[f"List[{model.__name__}]: expected an array, got {type(payload).__name__}"])

    items = []
    errors = []
    for index, element in enumerate(payload):
        result = parse_model(model, element)
        if not result.ok:
            errors.extend(f"[{index}] {message}" for message in result.errors)
        else:
            items.append(result.value)
    if errors:
        return ParseResult(errors=errors)
    return ParseResult(value=items)


# API envelope
class APIEnvelope(LedgerModel):
    success: bool
    message: str = ""
    data: Any = None
    errors: Optional[Dict[str, List[str]]] = None

    @field_validator('message', mode='before')
    @classmethod
    def default_message(cls, v):
        return v or ""


class PaginationMeta(LedgerModel):
    current_page: int
    last_page: int
    per_page: int
    total: int


class MessageResponse(LedgerModel):
    message: Optional[str] = None


# Auth
class User(IdentifiedModel):
    name: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    role_name: Optional[str] = None
    avatar: Optional[str] = None
    email_verified: Optional[bool] = None
    mfa_enabled: Optional[bool] = None


class Tenant(LedgerModel):
    id: Any = None
    name: Optional[str] = None
    slug: Optional[str] = None


class AuthResponse(LedgerModel):
    token: str
    token_type: Optional[str] = None
    is_new_user: Optional[bool] = None
    requires_onboarding: Optional[bool] = None
    user: User
    tenant: Optional[Tenant] = None


class LoginRequest(LedgerModel):
    email: str
    password: str
    device_name: str


class OTPRequest(LedgerModel):
    email: str
    device_name: str
    code: Optional[str] = None


class ResetPasswordRequest(LedgerModel):
    email: str
    code: str
    password: str
    password_confirmation: str


# Expenses
class ExpenseCategory(IdentifiedModel):
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None

    @property
    def display_icon(self):
        return self.icon or "dollarsign.circle"


class ExpenseSplit(IdentifiedModel):
    member_id: Optional[int] = None
    member_name: Optional[str] = None
    amount: Optional[float] = None
    percentage: Optional[float] = None
    is_paid: Optional[bool] = None


class Budget(IdentifiedModel):
    name: str
    type: Optional[BudgetType] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    amount: Optional[float] = None
    formatted_amount: Optional[str] = None
    total_amount: Optional[float] = None
    formatted_total_amount: Optional[str] = None
    allocated_amount: Optional[float] = None
    spent: Optional[float] = None
    formatted_spent: Optional[str] = None
    remaining: Optional[float] = None
    formatted_remaining: Optional[str] = None
    percentage_used: Optional[float] = None
    spent_percentage: Optional[float] = None
    category_id: Optional[int] = None
    category: Optional[ExpenseCategory] = None
    period: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_over_budget: Optional[bool] = None

    @property
    def amount_value(self) -> float:
        if self.amount is not None:
            return self.amount
        return self.total_amount or 0.0

    @property
    def spent_value(self) -> float:
        return self.spent or 0.0

    @property
    def remaining_value(self) -> float:
        return self.remaining or 0.0

    @property
    def percentage(self) -> float:
        if self.percentage_used is not None:
            return self.percentage_used
        return self.spent_percentage or 0.0

    @property
    def progress(self) -> float:
        """Width of the progress bar as a fraction of the full bar."""
        return progress_fraction(self.percentage)

    @property
    def display_icon(self):
        return self.icon or "📊"


class Expense(IdentifiedModel):
    description: Optional[str] = None
    amount: Optional[float] = None
    formatted_amount: Optional[str] = None
    category_id: Optional[int] = None
    category: Optional[ExpenseCategory] = None
    budget_id: Optional[int] = None
    budget: Optional[Budget] = None
    date: Optional[str] = None
    transaction_date: Optional[str] = None
    payee: Optional[str] = None
    paid_by: Optional[str] = None
    paid_by_id: Optional[int] = None
    split_with: Optional[List[ExpenseSplit]] = None
    payment_method: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[str] = None
    status: Optional[ExpenseStatus] = None
    receipt_url: Optional[str] = None
    receipt_path: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_date(self) -> str:
        if self.date:
            return self.date
        if self.transaction_date:
            formatted = format_display_date(self.transaction_date)
            if formatted:
                return formatted
        return "Unknown date"

    @property
    def receipt_reference(self) -> Optional[str]:
        return self.receipt_url or self.receipt_path


class ExpenseStats(LedgerModel):
    this_month: Optional[float] = None
    last_month: Optional[float] = None
    pending: Optional[float] = None
    owed_to_you: Optional[float] = None
    formatted_this_month: Optional[str] = None
    formatted_last_month: Optional[str] = None
    formatted_pending: Optional[str] = None
    formatted_owed_to_you: Optional[str] = None
    total_budget: Optional[float] = None
    total_spent: Optional[float] = None
    remaining: Optional[float] = None
    spent_percentage: Optional[float] = None
    formatted_total_budget: Optional[str] = None
    formatted_total_spent: Optional[str] = None
    formatted_remaining: Optional[str] = None


class SpendingByCategory(LedgerModel):
    category_id: Optional[int] = None
    category_name: str
    category_icon: Optional[str] = None
    category_color: Optional[str] = None
    total: Optional[float] = None
    formatted_total: Optional[str] = None
    count: int = 0


class ExpensesResponse(LedgerModel):
    expenses: Optional[List[Expense]] = None
    stats: Optional[ExpenseStats] = None
    categories: Optional[List[ExpenseCategory]] = None
    budgets: Optional[List[Budget]] = None
    spending_by_category: Optional[List[SpendingByCategory]] = None


class ExpenseDetailResponse(LedgerModel):
    expense: Expense


class ExpenseMutationResponse(LedgerModel):
    expense: Optional[Expense] = None
    message: Optional[str] = None


class CategoriesListResponse(LedgerModel):
    categories: List[ExpenseCategory]


class CreateExpenseRequest(LedgerModel):
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category_id: Optional[int] = None
    budget_id: Optional[int] = None
    transaction_date: str
    payment_method: Optional[PaymentMethod] = None
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    notes: str = ""
    receipt: Optional[str] = None


# Budgets
class BudgetDetail(IdentifiedModel):
    name: str
    type: Optional[BudgetType] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    period: Optional[str] = None
    period_label: Optional[str] = None
    amount: Optional[float] = None
    formatted_amount: Optional[str] = None
    total_amount: Optional[float] = None
    formatted_total_amount: Optional[str] = None
    spent: Optional[float] = None
    formatted_spent: Optional[str] = None
    remaining: Optional[float] = None
    formatted_remaining: Optional[str] = None
    spent_percentage: Optional[float] = None
    is_over_budget: Optional[bool] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def amount_value(self) -> float:
        if self.amount is not None:
            return self.amount
        return self.total_amount or 0.0

    @property
    def percentage(self) -> float:
        return self.spent_percentage or 0.0

    @property
    def progress(self) -> float:
        return progress_fraction(self.percentage)


class BudgetCategoryAllocation(IdentifiedModel):
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    allocated_amount: Optional[float] = None
    formatted_allocated: Optional[str] = None
    spent: Optional[float] = None
    formatted_spent: Optional[str] = None
    remaining: Optional[float] = None
    formatted_remaining: Optional[str] = None
    spent_percentage: Optional[float] = None
    is_over_budget: Optional[bool] = None

    @property
    def progress(self) -> float:
        return progress_fraction(self.spent_percentage or 0.0)


class BudgetsListResponse(LedgerModel):
    budgets: List[Budget]
    total: Optional[int] = None


class BudgetDetailResponse(LedgerModel):
    budget: Optional[BudgetDetail] = None
    categories: Optional[List[BudgetCategoryAllocation]] = None
    expenses: Optional[List[Expense]] = None


class BudgetMutationResponse(LedgerModel):
    budget: Optional[Budget] = None
    message: Optional[str] = None


class BudgetCategoryRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    icon: str = "📁"
    color: str = "#6366F1"
    allocated_amount: float = Field(default=0.0, ge=0)


class CreateBudgetRequest(LedgerModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: BudgetType = BudgetType.ENVELOPE
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    total_amount: float = Field(..., ge=0)
    start_date: str
    categories: Optional[List[BudgetCategoryRequest]] = None


# Family circles and members
class FamilyMemberBasic(IdentifiedModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    relationship: Optional[str] = None
    relationship_name: Optional[str] = None
    is_minor: Optional[bool] = None
    profile_image_url: Optional[str] = None
    immigration_status: Optional[str] = None
    immigration_status_name: Optional[str] = None
    co_parenting_enabled: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    documents_count: Optional[int] = None

    @property
    def display_name(self) -> str:
        if self.full_name is not None:
            return self.full_name
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def initials(self) -> str:
        first = (self.first_name or '')[:1]
        last = (self.last_name or '')[:1]
        return f"{first}{last}".upper()

    @property
    def formatted_age(self) -> Optional[str]:
        if self.age is None:
            return None
        return f"{self.age} years old"


class FamilyCircle(IdentifiedModel):
    name: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    members_count: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    members: Optional[List[FamilyMemberBasic]] = None


class MedicalInfo(LedgerModel):
    blood_type: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_group_number: Optional[str] = None
    primary_physician: Optional[str] = None
    physician_phone: Optional[str] = None
    notes: Optional[str] = None

    @property
    def blood_type_display_name(self) -> Optional[str]:
        return blood_type_display_name(self.blood_type)


class MemberContact(IdentifiedModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None
    relationship_name: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_emergency_contact: Optional[bool] = None
    priority: Optional[int] = None


class MemberDocument(IdentifiedModel):
    # Some endpoints embed documents without an id.
    id: Optional[int] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    issuing_authority: Optional[str] = None
    issuing_country: Optional[str] = None
    issuing_state: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    is_expired: Optional[bool] = None
    days_until_expiry: Optional[int] = None
    status: Optional[str] = None
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None

    @field_validator('days_until_expiry', mode='before')
    @classmethod
    def truncate_days(cls, v):
        if isinstance(v, float):
            return int(v)
        return v


class Allergy(IdentifiedModel):
    allergen_name: Optional[str] = None
    allergy_type: Optional[str] = None
    severity: Optional[str] = None
    severity_color: Optional[str] = None
    reaction: Optional[str] = None


class MedicalCondition(IdentifiedModel):
    name: Optional[str] = None
    status: Optional[str] = None
    status_color: Optional[str] = None
    diagnosed_date: Optional[str] = None
    notes: Optional[str] = None


class HealthcareProvider(IdentifiedModel):
    name: Optional[str] = None
    provider_type: Optional[str] = None
    specialty: Optional[str] = None
    clinic_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_primary: Optional[bool] = None


class FamilyMemberMedication(IdentifiedModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    is_active: Optional[bool] = None


class MemberVaccination(IdentifiedModel):
    vaccine_type: Optional[str] = None
    vaccine_name: Optional[str] = None
    custom_vaccine_name: Optional[str] = None
    vaccination_date: Optional[str] = None
    next_vaccination_date: Optional[str] = None
    administered_by: Optional[str] = None
    lot_number: Optional[str] = None
    notes: Optional[str] = None
    is_due: Optional[bool] = None
    is_coming_soon: Optional[bool] = None

    @property
    def display_name(self) -> str:
        return self.vaccine_name or self.custom_vaccine_name or self.vaccine_type or "Unknown"


class MemberEducationDocument(IdentifiedModel):
    document_type: Optional[str] = None
    document_type_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    school_year: Optional[str] = None
    grade_level: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    file_url: Optional[str] = None
    formatted_file_size: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def display_title(self) -> str:
        return self.title or self.document_type_name or "Document"


class MemberSchoolInfo(IdentifiedModel):
    school_name: Optional[str] = None
    grade_level: Optional[str] = None
    grade_level_name: Optional[str] = None
    school_year: Optional[str] = None
    is_current: Optional[bool] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    student_id: Optional[str] = None
    school_address: Optional[str] = None
    school_phone: Optional[str] = None
    school_email: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    counselor_name: Optional[str] = None
    counselor_email: Optional[str] = None
    bus_number: Optional[str] = None
    bus_pickup_time: Optional[str] = None
    bus_dropoff_time: Optional[str] = None
    notes: Optional[str] = None
    documents: Optional[List[MemberEducationDocument]] = None

    @property
    def display_grade_level(self) -> str:
        return self.grade_level_name or self.grade_level or ""

    @property
    def formatted_date_range(self) -> Optional[str]:
        start = self.start_date or ""
        end = "Present" if self.is_current else (self.end_date or "")
        if not start and not end:
            return self.school_year
        if not start:
            return end
        if not end:
            return start
        return f"{start} - {end}"

    @property
    def has_bus_info(self) -> bool:
        return bool(self.bus_number)


class FamilyMember(FamilyMemberBasic):
    """Full member record as returned by the member detail endpoint."""

    # Nested sections that are dropped (and reported) rather than failing the member.
    lenient_fields: ClassVar[Tuple[str, ...]] = (
        'medical_info', 'contacts', 'drivers_license', 'passport', 'social_security',
        'birth_certificate', 'allergies', 'medical_conditions', 'healthcare_providers',
        'medications', 'vaccinations', 'school_info', 'school_records',
    )

    medical_info: Optional[MedicalInfo] = None
    contacts: Optional[List[MemberContact]] = None
    drivers_license: Optional[MemberDocument] = None
    passport: Optional[MemberDocument] = None
    social_security: Optional[MemberDocument] = None
    birth_certificate: Optional[MemberDocument] = None
    allergies: Optional[List[Allergy]] = None
    medical_conditions: Optional[List[MedicalCondition]] = None
    healthcare_providers: Optional[List[HealthcareProvider]] = None
    medications: Optional[List[FamilyMemberMedication]] = None
    vaccinations: Optional[List[MemberVaccination]] = None
    school_info: Optional[MemberSchoolInfo] = None
    school_records: Optional[List[MemberSchoolInfo]] = None

    @property
    def emergency_contacts(self) -> List[MemberContact]:
        return [c for c in self.contacts or [] if c.is_emergency_contact is True]

    @property
    def formatted_date_of_birth(self) -> Optional[str]:
        if self.date_of_birth is None:
            return None
        return format_display_date(self.date_of_birth, pad_day=True) or self.date_of_birth

    def document_for(self, document_type: MemberDocumentType) -> Optional[MemberDocument]:
        return getattr(self, document_type.value)


class FamilyCirclesResponse(LedgerModel):
    family_circles: Optional[List[FamilyCircle]] = None
    total: Optional[int] = None


class FamilyCircleDetailResponse(LedgerModel):
    family_circle: FamilyCircle


class FamilyMembersResponse(LedgerModel):
    members: Optional[List[FamilyMemberBasic]] = None
    total: Optional[int] = None


class FamilyMemberDetailResponse(LedgerModel):
    member: FamilyMember


class MemberMutationResponse(LedgerModel):
    member: Optional[FamilyMemberBasic] = None
    message: Optional[str] = None


class CreateFamilyCircleRequest(LedgerModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    include_me: bool = True
    photo: Optional[str] = None


class FamilyMemberRequest(LedgerModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    phone_country_code: Optional[str] = None
    date_of_birth: str
    relationship: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    is_minor: bool = False
    co_parenting_enabled: bool = False
    immigration_status: Optional[str] = None
    profile_image: Optional[str] = None


class MemberDocumentRequest(LedgerModel):
    document_type: MemberDocumentType
    document_number: Optional[str] = None
    issuing_state: Optional[str] = None
    issuing_country: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    front_image: Optional[str] = None
    back_image: Optional[str] = None


class MedicalInfoRequest(LedgerModel):
    blood_type: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_group_number: Optional[str] = None
    primary_physician: Optional[str] = None
    physician_phone: Optional[str] = None
    notes: Optional[str] = None


class EmergencyContactRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    relationship: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_emergency_contact: bool = True
    priority: int = 1


class MedicationRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    notes: Optional[str] = None


class ConditionRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    status: Optional[str] = None
    diagnosed_date: Optional[str] = None
    notes: Optional[str] = None


class AllergyRequest(LedgerModel):
    allergy_type: Optional[str] = None
    allergen_name: str = Field(..., min_length=1)
    severity: str
    reaction: Optional[str] = None


class ProviderRequest(LedgerModel):
    provider_type: str
    name: str = Field(..., min_length=1)
    specialty: Optional[str] = None
    clinic_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_primary: bool = False


class VaccinationRequest(LedgerModel):
    vaccine_type: str
    vaccine_name: Optional[str] = None
    custom_vaccine_name: Optional[str] = None
    vaccination_date: Optional[str] = None
    next_vaccination_date: Optional[str] = None
    administered_by: Optional[str] = None
    lot_number: Optional[str] = None
    notes: Optional[str] = None


class SchoolRecordRequest(LedgerModel):
    school_name: str = Field(..., min_length=1)
    grade_level: Optional[str] = None
    school_year: Optional[str] = None
    is_current: bool = False
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    student_id: Optional[str] = None
    school_address: Optional[str] = None
    school_phone: Optional[str] = None
    school_email: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    counselor_name: Optional[str] = None
    counselor_email: Optional[str] = None
    bus_number: Optional[str] = None
    bus_pickup_time: Optional[str] = None
    bus_dropoff_time: Optional[str] = None
    notes: Optional[str] = None


# Family resources and legal documents
class ResourceFile(IdentifiedModel):
    name: Optional[str] = None
    original_name: Optional[str] = None
    file_path: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    formatted_size: Optional[str] = None
    is_image: Optional[bool] = None
    is_pdf: Optional[bool] = None
    download_url: Optional[str] = None
    view_url: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.original_name or "File"


class ResourceCreator(LedgerModel):
    id: int
    name: str


class FamilyResource(IdentifiedModel):
    name: str
    document_type: Optional[ResourceType] = None
    document_type_name: Optional[str] = None
    custom_document_type: Optional[str] = None
    description: Optional[str] = None
    original_location: Optional[str] = None
    status: Optional[ResourceStatus] = None
    status_name: Optional[str] = None
    digital_copy_date: Optional[str] = None
    expiration_date: Optional[str] = None
    is_expired: Optional[bool] = None
    notes: Optional[str] = None
    files: Optional[List[ResourceFile]] = None
    files_count: Optional[int] = None
    created_by: Optional[ResourceCreator] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def total_files_count(self) -> int:
        if self.files_count is not None:
            return self.files_count
        return len(self.files or [])

    @property
    def notes_text(self) -> Optional[str]:
        return strip_html(self.notes) if self.notes else self.notes


class ResourceCounts(LedgerModel):
    total: Optional[int] = None
    emergency: Optional[int] = None
    evacuation: Optional[int] = None
    fire: Optional[int] = None
    rental: Optional[int] = None
    warranty: Optional[int] = None
    other: Optional[int] = None


class ResourcesResponse(LedgerModel):
    resources: Optional[List[FamilyResource]] = None
    counts: Optional[ResourceCounts] = None
    total: Optional[int] = None


class FamilyResourcesResponse(LedgerModel):
    family_resources: Optional[List[FamilyResource]] = None
    total: Optional[int] = None


class ResourceDetailStats(LedgerModel):
    total_files: Optional[int] = None
    images: Optional[int] = None
    documents: Optional[int] = None


class ResourceDetailResponse(LedgerModel):
    resource: Optional[FamilyResource] = None
    files: Optional[List[ResourceFile]] = None
    stats: Optional[ResourceDetailStats] = None


class ResourceRequest(LedgerModel):
    name: str = Field(..., min_length=1, max_length=200)
    document_type: ResourceType
    custom_document_type: Optional[str] = None
    description: Optional[str] = None
    original_location: Optional[str] = None
    status: Optional[ResourceStatus] = None
    digital_copy_date: Optional[str] = None
    expiration_date: Optional[str] = None
    notes: Optional[str] = None
    files: Optional[List[str]] = None


class LegalDocumentFile(IdentifiedModel):
    name: str
    file_path: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    formatted_size: Optional[str] = None
    is_image: Optional[bool] = None
    is_pdf: Optional[bool] = None
    download_url: Optional[str] = None
    view_url: Optional[str] = None
    created_at: Optional[str] = None


class LegalDocument(IdentifiedModel):
    name: Optional[str] = None
    document_type: Optional[LegalDocumentType] = None
    document_type_name: Optional[str] = None
    status: Optional[LegalDocumentStatus] = None
    status_name: Optional[str] = None
    status_color: Optional[str] = None
    original_location: Optional[str] = None
    digital_copy_date: Optional[str] = None
    execution_date: Optional[str] = None
    expiration_date: Optional[str] = None
    is_expired: Optional[bool] = None
    is_expiring_soon: Optional[bool] = None
    attorney_name: Optional[str] = None
    attorney_phone: Optional[str] = None
    attorney_email: Optional[str] = None
    attorney_firm: Optional[str] = None
    notes: Optional[str] = None
    files: Optional[List[LegalDocumentFile]] = None
    files_count: Optional[int] = None
    family_circle_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def notes_text(self) -> Optional[str]:
        return strip_html(self.notes) if self.notes else self.notes

    @property
    def formatted_execution_date(self) -> Optional[str]:
        if not self.execution_date:
            return None
        try:
            parsed = datetime.strptime(self.execution_date, '%Y-%m-%d')
        except ValueError:
            return None
        return f"{parsed:%b} {parsed.day}, {parsed.year}"


class LegalDocumentCircle(LedgerModel):
    id: int
    name: str


class LegalDocumentsResponse(LedgerModel):
    legal_documents: Optional[List[LegalDocument]] = None
    total: Optional[int] = None


class LegalDocumentDetailResponse(LedgerModel):
    legal_document: Optional[LegalDocument] = None
    files: Optional[List[LegalDocumentFile]] = None
    family_circle: Optional[LegalDocumentCircle] = None


# Household documents
class InsurancePolicy(IdentifiedModel):
    insurance_type: Optional[str] = None
    provider_name: Optional[str] = None
    policy_number: Optional[str] = None
    group_number: Optional[str] = None
    plan_name: Optional[str] = None
    premium_amount: Optional[str] = None
    payment_frequency: Optional[str] = None
    effective_date: Optional[str] = None
    expiration_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    agent_name: Optional[str] = None
    agent_phone: Optional[str] = None
    agent_email: Optional[str] = None
    claims_phone: Optional[str] = None
    coverage_details: Optional[str] = None
    card_front_image_url: Optional[str] = None
    card_back_image_url: Optional[str] = None

    @property
    def insurance_type_name(self) -> str:
        return insurance_type_name(self.insurance_type)


class TaxDocument(LedgerModel):
    path: str
    url: str
    name: str

    def __eq__(self, other):
        if not isinstance(other, TaxDocument):
            return NotImplemented
        return self.path == other.path

    def __hash__(self):
        return hash(self.path)


class TaxReturn(IdentifiedModel):
    tax_year: Optional[int] = None
    filing_status: Optional[str] = None
    status: Optional[str] = None
    tax_jurisdiction: Optional[str] = None
    state_jurisdiction: Optional[str] = None
    filing_date: Optional[str] = None
    due_date: Optional[str] = None
    refund_amount: Optional[str] = None
    amount_owed: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    cpa_name: Optional[str] = None
    cpa_phone: Optional[str] = None
    cpa_email: Optional[str] = None
    cpa_firm: Optional[str] = None
    federal_returns: Optional[List[str]] = None
    state_returns: Optional[List[str]] = None
    supporting_documents: Optional[List[str]] = None
    federal_returns_urls: Optional[List[TaxDocument]] = None
    state_returns_urls: Optional[List[TaxDocument]] = None
    supporting_documents_urls: Optional[List[TaxDocument]] = None


class DocumentsResponse(LedgerModel):
    insurance_policies: Optional[List[InsurancePolicy]] = None
    tax_returns: Optional[List[TaxReturn]] = None


class InsurancePolicyResponse(LedgerModel):
    insurance_policy: InsurancePolicy


class TaxReturnResponse(LedgerModel):
    tax_return: TaxReturn


class InsurancePolicyRequest(LedgerModel):
    insurance_type: str
    provider_name: str = Field(..., min_length=1)
    policy_number: Optional[str] = None
    group_number: Optional[str] = None
    plan_name: Optional[str] = None
    premium_amount: Optional[float] = None
    payment_frequency: Optional[str] = None
    effective_date: Optional[str] = None
    expiration_date: Optional[str] = None
    status: Optional[str] = None
    agent_name: Optional[str] = None
    agent_phone: Optional[str] = None
    agent_email: Optional[str] = None
    claims_phone: Optional[str] = None
    coverage_details: Optional[str] = None
    notes: Optional[str] = None
    card_front_image: Optional[str] = None
    card_back_image: Optional[str] = None


class TaxReturnRequest(LedgerModel):
    tax_year: int = Field(..., ge=1900, le=2100)
    filing_status: Optional[str] = None
    status: Optional[str] = None
    tax_jurisdiction: Optional[str] = None
    state_jurisdiction: Optional[str] = None
    filing_date: Optional[str] = None
    due_date: Optional[str] = None
    refund_amount: Optional[float] = None
    amount_owed: Optional[float] = None
    cpa_name: Optional[str] = None
    cpa_phone: Optional[str] = None
    cpa_email: Optional[str] = None
    cpa_firm: Optional[str] = None
    notes: Optional[str] = None
    federal_returns: Optional[List[str]] = None
    state_returns: Optional[List[str]] = None
    supporting_documents: Optional[List[str]] = None


# Dashboard and reminders
class Reminder(IdentifiedModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_date_formatted: Optional[str] = None
    due_text: Optional[str] = None
    due_time: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None
    category: Optional[str] = None
    category_icon: Optional[str] = None
    assigned_to: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RemindersResponse(LedgerModel):
    overdue: Optional[List[Reminder]] = None
    today: Optional[List[Reminder]] = None
    tomorrow: Optional[List[Reminder]] = None
    this_week: Optional[List[Reminder]] = None


class DashboardStats(LedgerModel):
    family_circles: Optional[int] = None
    family_members: Optional[int] = None
    assets: Optional[int] = None
    total_asset_value: Optional[float] = None
    formatted_asset_value: Optional[str] = None


class QuickAction(LedgerModel):
    id: str
    title: str
    icon: str
    route: str


class DashboardOverview(LedgerModel):
    user: Optional[User] = None
    tenant: Optional[Tenant] = None
    stats: Optional[DashboardStats] = None
    quick_actions: Optional[List[QuickAction]] = None


# Co-parenting
class ChildCoparent(IdentifiedModel):
    name: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    parent_role: Optional[str] = None
    parent_role_label: Optional[str] = None
    relationship: Optional[str] = None


class CoparentChild(IdentifiedModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    allergies: Optional[str] = None
    medical_conditions: Optional[str] = None
    medications: Optional[str] = None
    school_name: Optional[str] = None
    grade: Optional[str] = None
    notes: Optional[str] = None
    profile_image_url: Optional[str] = None
    initials: Optional[str] = None
    coparents: Optional[List[ChildCoparent]] = None

    @property
    def blood_type_display_name(self) -> Optional[str]:
        return blood_type_display_name(self.blood_type)


class CoparentingStats(LedgerModel):
    children_count: Optional[int] = None
    coparents_count: Optional[int] = None
    pending_invites_count: Optional[int] = None


class PendingInvite(IdentifiedModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    parent_role: Optional[str] = None
    parent_role_label: Optional[str] = None
    children_names: Optional[str] = None
    expires_at: Optional[str] = None
    expires_in: Optional[str] = None


class CoparentingSchedule(IdentifiedModel):
    name: str
    template_type: str
    begins_at: Optional[str] = None
    ends_at: Optional[str] = None
    primary_parent: Optional[str] = None


class CoparentActivity(IdentifiedModel):
    title: str
    description: Optional[str] = None
    date: str
    time: Optional[str] = None
    location: Optional[str] = None


class MessageSender(LedgerModel):
    id: int
    name: str
    avatar: Optional[str] = None


class MessageAttachment(IdentifiedModel):
    name: str
    url: str


class CoparentMessage(IdentifiedModel):
    content: str
    category: str
    sender: MessageSender
    is_own: bool = False
    was_edited: bool = False
    attachments: Optional[List[MessageAttachment]] = None
    created_at: str


class CoparentConversation(IdentifiedModel):
    title: str
    last_message: Optional[str] = None
    unread_count: int = 0
    updated_at: str
    messages: Optional[List[CoparentMessage]] = None


class CurrentCoparentUser(LedgerModel):
    id: int
    name: Optional[str] = None
    initials: Optional[str] = None


class CoparentingDashboardResponse(LedgerModel):
    children: Optional[List[CoparentChild]] = None
    coparents: Optional[List[ChildCoparent]] = None
    pending_invites: Optional[List[PendingInvite]] = None
    stats: Optional[CoparentingStats] = None
    upcoming_activities: Optional[List[CoparentActivity]] = None
    recent_messages: Optional[List[CoparentMessage]] = None
    current_user: Optional[CurrentCoparentUser] = None


class SendMessageRequest(LedgerModel):
    content: str = Field(..., min_length=1)
    category: str = "general"


# Goals and tasks
def _truncate_float(v):
    if isinstance(v, float):
        return int(v)
    return v


class Goal(IdentifiedModel):
    ASSIGNMENT_LABELS: ClassVar[Dict[str, str]] = {
        'family': "Entire Family",
        'parents': "Parents Only",
        'kids': "All Kids",
        'individual': "Individual",
    }
    REWARD_LABELS: ClassVar[Dict[str, str]] = {
        'sticker': "Sticker",
        'points': "Points",
        'treat': "Special Treat",
        'outing': "Fun Outing",
    }

    title: str
    description: Optional[str] = None
    target_date: Optional[str] = None
    progress: Optional[int] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    category_emoji: Optional[str] = None
    category_color: Optional[str] = None
    goal_type: Optional[str] = None
    habit_frequency: Optional[str] = None
    milestone_target: Optional[int] = None
    milestone_current: Optional[int] = None
    milestone_unit: Optional[str] = None
    milestone_progress: Optional[float] = None
    assignment_type: Optional[str] = None
    is_kid_goal: Optional[bool] = None
    check_in_frequency: Optional[str] = None
    rewards_enabled: Optional[bool] = None
    reward_type: Optional[str] = None
    reward_custom: Optional[str] = None
    reward_claimed: Optional[bool] = None
    active_tasks_count: Optional[int] = None
    completed_tasks_count: Optional[int] = None
    total_tasks_count: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator('progress', 'milestone_target', 'milestone_current', mode='before')
    @classmethod
    def truncate_counts(cls, v):
        return _truncate_float(v)

    @property
    def goal_type_label(self) -> str:
        try:
            return GoalType(self.goal_type).display_name
        except ValueError:
            return GoalType.ONE_TIME.display_name

    @property
    def assignment_label(self) -> str:
        return self.ASSIGNMENT_LABELS.get(self.assignment_type, "Entire Family")

    @property
    def reward_label(self) -> str:
        if self.reward_type == RewardType.CUSTOM:
            return self.reward_custom or "Custom Reward"
        return self.REWARD_LABELS.get(self.reward_type, "Reward")


class GoalTask(IdentifiedModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None
    assigned_to: Optional[str] = None
    goal_id: Optional[int] = None
    list_name: Optional[str] = None
    count_toward_goal: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @property
    def is_open(self) -> bool:
        return self.status in (TaskStatus.OPEN, TaskStatus.IN_PROGRESS)


class GoalMilestone(IdentifiedModel):
    title: str
    completed: Optional[bool] = None


class GoalsResponse(LedgerModel):
    goals: Optional[List[Goal]] = None
    tasks: Optional[List[GoalTask]] = None
    open_tasks_count: Optional[int] = None
    active_goals_count: Optional[int] = None


class GoalDetailResponse(LedgerModel):
    goal: Goal
    tasks: Optional[List[GoalTask]] = None
    milestones: Optional[List[GoalMilestone]] = None


class TaskDetailResponse(LedgerModel):
    task: GoalTask


class CreateGoalRequest(LedgerModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    goal_type: GoalType = GoalType.ONE_TIME
    habit_frequency: Optional[str] = None
    milestone_target: Optional[int] = None
    milestone_unit: Optional[str] = None
    check_in_frequency: Optional[str] = None
    rewards_enabled: bool = False
    reward_type: Optional[RewardType] = None
    reward_custom: Optional[str] = None
    is_kid_goal: bool = False
    visible_to_kids: Optional[bool] = None
    kids_can_update: Optional[bool] = None
    assignment_type: str = 'family'
    assigned_members: Optional[List[int]] = None


class CreateTaskRequest(LedgerModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    priority: str = 'medium'
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    goal_id: Optional[int] = None
    count_toward_goal: bool = False
    assignees: Optional[List[int]] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[str] = None
    recurrence_interval: Optional[int] = None
    send_reminder: bool = False
    reminder_type: Optional[str] = None


# Assets
class AssetOwner(IdentifiedModel):
    family_member_id: Optional[int] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_phone: Optional[str] = None
    ownership_percentage: Optional[float] = None
    formatted_ownership_percentage: Optional[str] = None
    is_primary_owner: Optional[bool] = None
    is_family_member: Optional[bool] = None
    is_external_owner: Optional[bool] = None


class Asset(IdentifiedModel):
    name: str
    image_url: Optional[str] = None
    asset_category: Optional[str] = None
    asset_type: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    acquisition_date: Optional[str] = None
    # Sent as decimal strings or numbers
    purchase_value: Optional[float] = None
    current_value: Optional[float] = None
    currency: Optional[str] = None
    formatted_current_value: Optional[str] = None
    location_address: Optional[str] = None
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    location_zip: Optional[str] = None
    location_country: Optional[str] = None
    storage_location: Optional[str] = None
    room_location: Optional[str] = None
    status: Optional[str] = None
    status_color: Optional[str] = None
    ownership_type: Optional[str] = None
    is_insured: Optional[bool] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    insurance_renewal_date: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_year: Optional[int] = None
    vin_registration: Optional[str] = None
    license_plate: Optional[str] = None
    mileage: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    owners: Optional[List[AssetOwner]] = None
    documents_count: Optional[int] = None

    @property
    def category_key(self) -> str:
        return self.asset_category or 'other'

    @property
    def primary_owner(self) -> Optional[AssetOwner]:
        return next((owner for owner in self.owners or [] if owner.is_primary_owner), None)


class AssetsResponse(LedgerModel):
    assets: Optional[List[Asset]] = None
    total: Optional[int] = None
    total_value: Optional[float] = None
    formatted_total_value: Optional[str] = None


class AssetFile(IdentifiedModel):
    name: str
    document_type: Optional[str] = None
    document_type_name: Optional[str] = None
    file_path: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    formatted_size: Optional[str] = None
    is_image: Optional[bool] = None
    is_pdf: Optional[bool] = None
    download_url: Optional[str] = None
    view_url: Optional[str] = None
    created_at: Optional[str] = None


class AssetDetailResponse(LedgerModel):
    asset: Asset
    files: Optional[List[AssetFile]] = None


# People (contacts outside the family circle)
class PersonEmail(IdentifiedModel):
    id: Optional[int] = None
    email: Optional[str] = None
    label: Optional[str] = None
    is_primary: Optional[bool] = None


class PersonPhone(IdentifiedModel):
    id: Optional[int] = None
    phone: Optional[str] = None
    formatted_phone: Optional[str] = None
    label: Optional[str] = None
    is_primary: Optional[bool] = None


class PersonAddress(IdentifiedModel):
    label: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    full_address: Optional[str] = None
    is_primary: Optional[bool] = None


class PersonImportantDate(IdentifiedModel):
    label: Optional[str] = None
    date: Optional[str] = None
    date_raw: Optional[str] = None
    is_annual: Optional[bool] = None


class PersonLink(IdentifiedModel):
    label: Optional[str] = None
    url: Optional[str] = None


class PersonAttachment(IdentifiedModel):
    name: Optional[str] = None
    file_type: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None
    formatted_size: Optional[str] = None
    is_image: Optional[bool] = None


class Person(IdentifiedModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    nickname: Optional[str] = None
    relationship: Optional[str] = None
    relationship_name: Optional[str] = None
    custom_relationship: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    birthday: Optional[str] = None
    birthday_raw: Optional[str] = None
    age: Optional[int] = None
    profile_image_url: Optional[str] = None
    primary_email: Optional[PersonEmail] = None
    primary_phone: Optional[PersonPhone] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    how_we_know: Optional[str] = None
    visibility: Optional[str] = None
    visibility_name: Optional[str] = None
    source: Optional[str] = None
    source_name: Optional[str] = None
    met_at: Optional[str] = None
    met_location: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.nickname or ""

    @property
    def initials(self) -> str:
        return f"{(self.first_name or '')[:1]}{(self.last_name or '')[:1]}".upper()


class PersonStats(LedgerModel):
    emails: Optional[int] = None
    phones: Optional[int] = None
    addresses: Optional[int] = None
    important_dates: Optional[int] = None
    attachments: Optional[int] = None


class PeopleResponse(LedgerModel):
    people: Optional[List[Person]] = None
    total: Optional[int] = None
    by_relationship: Optional[Dict[str, int]] = None


class PersonDetailResponse(LedgerModel):
    person: Optional[Person] = None
    emails: Optional[List[PersonEmail]] = None
    phones: Optional[List[PersonPhone]] = None
    addresses: Optional[List[PersonAddress]] = None
    important_dates: Optional[List[PersonImportantDate]] = None
    links: Optional[List[PersonLink]] = None
    attachments: Optional[List[PersonAttachment]] = None
    stats: Optional[PersonStats] = None


# Pets
class PetVaccination(IdentifiedModel):
    name: str
    date_given: Optional[str] = None
    administered_date: Optional[str] = None
    next_due_date: Optional[str] = None
    next_due_date_raw: Optional[str] = None
    administered_by: Optional[str] = None
    batch_number: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_overdue(self) -> bool:
        return self.status == 'overdue'


class PetMedication(IdentifiedModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    prescribed_by: Optional[str] = None
    reason: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class Pet(IdentifiedModel):
    name: str
    species: Optional[str] = None
    species_label: Optional[str] = None
    species_emoji: Optional[str] = None
    breed: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[str] = None
    age_short: Optional[str] = None
    gender: Optional[str] = None
    gender_label: Optional[str] = None
    color: Optional[str] = None
    weight: Optional[float] = None
    microchip_id: Optional[str] = None
    photo_url: Optional[str] = None
    status: Optional[str] = None
    is_passed_away: Optional[bool] = None
    passed_away_date: Optional[str] = None
    vet_name: Optional[str] = None
    vet_phone: Optional[str] = None
    vet_clinic: Optional[str] = None
    vet_address: Optional[str] = None
    allergies: Optional[str] = None
    conditions: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_policy_number: Optional[str] = None
    notes: Optional[str] = None
    overdue_vaccinations: Optional[List[PetVaccination]] = None
    upcoming_vaccinations: Optional[List[PetVaccination]] = None
    active_medications: Optional[List[PetMedication]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def needs_attention(self) -> bool:
        return bool(self.overdue_vaccinations)


class PetStats(LedgerModel):
    overdue_vaccinations: Optional[int] = None
    due_soon_vaccinations: Optional[int] = None
    active_medications: Optional[int] = None
    total_vaccinations: Optional[int] = None
    total_medications: Optional[int] = None


class PetsResponse(LedgerModel):
    pets: Optional[List[Pet]] = None
    total_pets: Optional[int] = None
    upcoming_vaccinations: Optional[int] = None
    overdue_vaccinations: Optional[int] = None


class PetDetailResponse(LedgerModel):
    pet: Pet
    vaccinations: Optional[List[PetVaccination]] = None
    medications: Optional[List[PetMedication]] = None
    stats: Optional[PetStats] = None


class PetVaccinationRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    administered_date: Optional[str] = None
    next_due_date: Optional[str] = None
    administered_by: Optional[str] = None
    batch_number: Optional[str] = None
    notes: Optional[str] = None


class PetMedicationRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    prescribed_by: Optional[str] = None
    reason: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


# Journal
class JournalTag(IdentifiedModel):
    name: str


class JournalAuthor(LedgerModel):
    id: int
    name: Optional[str] = None
    avatar: Optional[str] = None


class JournalAttachment(IdentifiedModel):
    type: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    url: Optional[str] = None


class JournalEntry(IdentifiedModel):
    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[str] = None
    type_label: Optional[str] = None
    mood: Optional[str] = None
    mood_emoji: Optional[str] = None
    mood_label: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    formatted_date: Optional[str] = None
    is_pinned: Optional[bool] = None
    is_draft: Optional[bool] = None
    status: Optional[str] = None
    visibility: Optional[str] = None
    visibility_label: Optional[str] = None
    tags: Optional[List[JournalTag]] = None
    photos: Optional[List[str]] = None
    attachments: Optional[List[JournalAttachment]] = None
    author: Optional[JournalAuthor] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def content_text(self) -> Optional[str]:
        """Entry body with the editor's markup removed."""
        return strip_html(self.content) if self.content else self.content

    def has_tag(self, name: str) -> bool:
        return any(tag.name.lower() == name.lower() for tag in self.tags or [])


class JournalStats(LedgerModel):
    total: Optional[int] = None
    drafts: Optional[int] = None
    this_month: Optional[int] = None


class JournalResponse(LedgerModel):
    entries: Optional[List[JournalEntry]] = None
    pinned_entries: Optional[List[JournalEntry]] = None
    stats: Optional[JournalStats] = None
    tags: Optional[List[JournalTag]] = None


class JournalEntryDetailResponse(LedgerModel):
    entry: JournalEntry


class JournalEntryRequest(LedgerModel):
    title: Optional[str] = None
    content: str = Field(..., min_length=1)
    type: str = 'journal'
    mood: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    visibility: str = 'family'
    is_draft: bool = False
    tags: Optional[List[str]] = None


# Shopping
class ShoppingItem(IdentifiedModel):
    name: str
    quantity: Optional[int] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    is_checked: Optional[bool] = None
    is_purchased: Optional[bool] = None
    price: Optional[float] = None
    formatted_price: Optional[str] = None
    notes: Optional[str] = None
    priority: Optional[str] = None
    added_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_from_text(cls, v):
        """Quantities arrive as numbers or strings; unparseable text means no quantity."""
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return None
        return _truncate_float(v)

    @property
    def category_key(self) -> str:
        return self.category or ShoppingCategory.OTHER.value


class ShoppingList(IdentifiedModel):
    name: str
    description: Optional[str] = None
    store_name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_default: Optional[bool] = None
    items_count: Optional[int] = None
    purchased_count: Optional[int] = None
    unchecked_count: Optional[int] = None
    progress_percentage: Optional[float] = None
    items: Optional[List[ShoppingItem]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def progress(self) -> float:
        return progress_fraction(self.progress_percentage)


class ShoppingStats(LedgerModel):
    total_lists: Optional[int] = None
    total_items: Optional[int] = None
    completed_items: Optional[int] = None
    pending_items: Optional[int] = None


class ShoppingListsResponse(LedgerModel):
    lists: Optional[List[ShoppingList]] = None
    stats: Optional[ShoppingStats] = None


class ShoppingDetailStats(LedgerModel):
    total_items: Optional[int] = None
    purchased_items: Optional[int] = None
    pending_items: Optional[int] = None
    progress_percentage: Optional[float] = None


class ShoppingListDetailResponse(LedgerModel):
    list: Optional[ShoppingList] = None
    items: Optional[List[ShoppingItem]] = None
    stats: Optional[ShoppingDetailStats] = None


class ShoppingListRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    store_name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class AddShoppingItemRequest(LedgerModel):
    name: str = Field(..., min_length=1)
    quantity: Optional[int] = None
    category: Optional[str] = None
