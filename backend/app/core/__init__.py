"""
영업일/요금 계산 엔진
"""
from app.core.additional_fee import (
    AdditionalFeeResult, EntryCategory, apply_fee_discount,
    compute_additional_fee, entry_category, next_accrual_at,
)
from app.core.business_day import (
    business_day_range, current_business_day, resolve_business_day,
    shift_business_day, validate_start_hour,
)
from app.core.clock import KST, ensure_utc, format_datetime_local, now_utc, to_local
from app.core.errors import (
    ConfigurationError, NegativePaymentError, PaymentMismatchError, PaymentValidationError,
)
from app.core.payment import PaymentSplit, combine_payments, format_payment_breakdown, validate_split
from app.core.pricing import OptionType, PricingOption, build_option, discount_exceeds_base, resolve_final_price
from app.core.settings import DEFAULT_SETTINGS, FacilitySettings
from app.core.time_tier import TimeTier, base_price, classify

__all__ = [
    "AdditionalFeeResult",
    "EntryCategory",
    "apply_fee_discount",
    "compute_additional_fee",
    "entry_category",
    "next_accrual_at",
    "business_day_range",
    "current_business_day",
    "resolve_business_day",
    "shift_business_day",
    "validate_start_hour",
    "KST",
    "ensure_utc",
    "format_datetime_local",
    "now_utc",
    "to_local",
    "ConfigurationError",
    "NegativePaymentError",
    "PaymentMismatchError",
    "PaymentValidationError",
    "PaymentSplit",
    "combine_payments",
    "format_payment_breakdown",
    "validate_split",
    "OptionType",
    "PricingOption",
    "build_option",
    "discount_exceeds_base",
    "resolve_final_price",
    "DEFAULT_SETTINGS",
    "FacilitySettings",
    "TimeTier",
    "base_price",
    "classify",
]
