"""
입실 요금 옵션 적용
옵션은 하나만 선택되며 직접입력 > 외국인 > 할인 > 없음 순으로 판정한다
"""
import enum
from dataclasses import dataclass
from typing import Optional, Union


class OptionType(str, enum.Enum):
    NONE = "none"
    DISCOUNT = "discount"
    CUSTOM = "custom"
    FOREIGNER = "foreigner"
    DIRECT_PRICE = "direct_price"


@dataclass(frozen=True)
class PricingOption:
    option_type: OptionType = OptionType.NONE
    amount: Optional[int] = None
    foreign_price: Optional[int] = None
    direct_price: Optional[int] = None

    @classmethod
    def none(cls) -> "PricingOption":
        return cls()

    @classmethod
    def flat_discount(cls, amount: int) -> "PricingOption":
        return cls(option_type=OptionType.DISCOUNT, amount=amount)

    @classmethod
    def custom_discount(cls, amount: int) -> "PricingOption":
        return cls(option_type=OptionType.CUSTOM, amount=amount)

    @classmethod
    def foreign_rate(cls, flat_price: int) -> "PricingOption":
        return cls(option_type=OptionType.FOREIGNER, foreign_price=flat_price)

    @classmethod
    def direct(cls, amount: int) -> "PricingOption":
        return cls(option_type=OptionType.DIRECT_PRICE, direct_price=amount)

    @property
    def is_foreigner(self) -> bool:
        return self.option_type == OptionType.FOREIGNER or self.foreign_price is not None

    @property
    def discount_amount(self) -> int:
        if self.option_type in (OptionType.DISCOUNT, OptionType.CUSTOM) and self.amount:
            return self.amount
        return 0


def resolve_final_price(base_price: int, option: PricingOption) -> int:
    """옵션 적용 후 입실 요금 (추가요금 제외)"""
    if option.direct_price is not None:
        return option.direct_price
    if option.is_foreigner and option.foreign_price is not None:
        return option.foreign_price
    if option.discount_amount:
        return base_price - option.discount_amount
    return base_price


def discount_exceeds_base(base_price: int, option: PricingOption) -> bool:
    """할인액이 기본요금보다 큰 경우 (입력 경고용)"""
    return resolve_final_price(base_price, option) < 0


def build_option(
    option_type: Union[OptionType, str],
    option_amount: Optional[int],
    discount_amount: int,
    foreigner_price: int,
) -> PricingOption:
    """
    저장된 옵션 값과 설정값으로 PricingOption 생성

    할인(discount)은 금액 미지정 시 설정된 기본 할인액을 사용하고
    직접입력(direct_price)은 option_amount를 최종 요금으로 사용한다
    """
    option_type = OptionType(option_type)
    if option_type == OptionType.DISCOUNT:
        return PricingOption.flat_discount(option_amount if option_amount is not None else discount_amount)
    if option_type == OptionType.CUSTOM:
        return PricingOption.custom_discount(option_amount or 0)
    if option_type == OptionType.FOREIGNER:
        return PricingOption.foreign_rate(foreigner_price)
    if option_type == OptionType.DIRECT_PRICE:
        if option_amount is None:
            raise ValueError("직접입력 옵션은 금액이 필요합니다")
        return PricingOption.direct(option_amount)
    return PricingOption.none()
