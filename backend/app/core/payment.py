"""
결제수단별 금액 검증 (현금/카드/이체)
입실 요금과 추가요금은 서로 독립된 정산으로 각각 검증한다
"""
from dataclasses import dataclass
from typing import Optional

from app.core.errors import NegativePaymentError, PaymentMismatchError

PAYMENT_METHODS = ("cash", "card", "transfer")

_SHORT_LABELS = {"cash": "현", "card": "카", "transfer": "이"}
_FULL_LABELS = {"cash": "현금", "card": "카드", "transfer": "이체"}


@dataclass(frozen=True)
class PaymentSplit:
    cash: int = 0
    card: int = 0
    transfer: int = 0

    @property
    def total(self) -> int:
        return self.cash + self.card + self.transfer

    def as_dict(self) -> dict:
        return {"cash": self.cash, "card": self.card, "transfer": self.transfer}


def validate_split(cash: int, card: int, transfer: int, target_amount: int) -> PaymentSplit:
    """
    결제 금액 검증

    음수 금액은 NegativePaymentError, 합계 불일치는 PaymentMismatchError.
    허용 오차 없이 정확히 일치해야 한다.
    """
    for method, amount in zip(PAYMENT_METHODS, (cash, card, transfer)):
        if amount < 0:
            raise NegativePaymentError(method, amount)
    split = PaymentSplit(cash=cash, card=card, transfer=transfer)
    if split.total != target_amount:
        raise PaymentMismatchError(split.total, target_amount)
    return split


def combine_payments(first: PaymentSplit, second: PaymentSplit) -> PaymentSplit:
    """집계 표시용 합산 (검증에는 사용하지 않음)"""
    return PaymentSplit(
        cash=first.cash + second.cash,
        card=first.card + second.card,
        transfer=first.transfer + second.transfer,
    )


def _format_korean_amount(amount: int) -> str:
    # 10000 -> "1만", 5000 -> "5천"
    man, rest = divmod(amount, 10000)
    cheon = rest // 1000
    result = ""
    if man:
        result += f"{man}만"
    if cheon:
        result += f"{cheon}천"
    if rest % 1000 or not result:
        return str(amount)
    return result


def format_payment_breakdown(split: PaymentSplit, single_method: Optional[str] = None) -> str:
    """
    결제 내역 표시 문자열
    복합 결제는 "현1만/카5천", 단일 결제수단만 있는 경우는 "현금"/"카드"/"이체"
    """
    parts = [
        f"{_SHORT_LABELS[method]}{_format_korean_amount(amount)}"
        for method, amount in split.as_dict().items()
        if amount > 0
    ]
    if parts:
        return "/".join(parts)
    if single_method:
        return _FULL_LABELS.get(single_method, "현금")
    return "무료"
