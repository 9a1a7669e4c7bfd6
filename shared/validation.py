"""Input validation utilities."""
import re


class ValidationError(Exception):
    """Raised when input validation fails."""
    pass


class Validator:
    """Form validation helpers shared by the view-models."""

    # Local part and domain labels must start/end with alphanumerics
    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9]+([._%+-][a-zA-Z0-9]+)*@([a-zA-Z0-9]+([.-][a-zA-Z0-9]+)*\.)+[a-zA-Z]{2,}$')
    OTP_PATTERN = re.compile(r'^\d{4,8}$')

    @staticmethod
    def validate_required(value, field_name):
        """Validate that a required field is not empty."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_name} is required")
        return value

    @staticmethod
    def validate_string_length(value, field_name, min_length=0, max_length=None):
        """Validate string length constraints."""
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")

        if len(value) < min_length:
            raise ValidationError(f"{field_name} must be at least {min_length} characters")

        if max_length and len(value) > max_length:
            raise ValidationError(f"{field_name} must be no more than {max_length} characters")

        return value.strip()

    @staticmethod
    def validate_email(email):
        """Validate email format."""
        email = (email or '').strip()
        if not Validator.EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email format")
        return email

    @staticmethod
    def validate_otp(code):
        """Validate a one-time passcode: digits only."""
        code = (code or '').strip()
        if not Validator.OTP_PATTERN.match(code):
            raise ValidationError("Please enter the verification code")
        return code

    @staticmethod
    def validate_amount(value, message="Please enter a valid amount"):
        """Parse a money amount from form text; must be strictly positive.

        Accepts strings with thousands separators or a leading currency sign.
        """
        if value is None:
            raise ValidationError(message)
        if isinstance(value, str):
            text = value.strip().replace(',', '').lstrip('$')
            try:
                value = float(text)
            except ValueError:
                raise ValidationError(message)
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise ValidationError(message)
        if amount != amount or amount <= 0:
            raise ValidationError(message)
        return amount

    @staticmethod
    def validate_non_negative(value, field_name):
        """Validate an optional allocation amount; blank means zero."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0.0
        try:
            amount = float(str(value).replace(',', '').strip())
        except ValueError:
            raise ValidationError(f"{field_name} must be a number")
        if amount < 0:
            raise ValidationError(f"{field_name} cannot be negative")
        return amount

    @staticmethod
    def validate_password_reset(password, confirmation, min_length=8):
        """Validate a new password and its confirmation."""
        if not password or len(password) < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")
        if password != confirmation:
            raise ValidationError("Passwords do not match")
        return password
