"""
라우트 공용 도우미
"""
from typing import Optional
from fastapi import HTTPException

from app.core.errors import PaymentValidationError
from app.core.payment import PaymentSplit, validate_split


def validate_payment(payment, target_amount: int, label: str) -> PaymentSplit:
    """결제 내역 검증, 실패 시 400"""
    try:
        return validate_split(payment.cash, payment.card, payment.transfer, target_amount)
    except PaymentValidationError as e:
        raise HTTPException(status_code=400, detail=f"{label}: {e}")


def apply_payment(record, split: Optional[PaymentSplit]) -> None:
    """결제수단별 금액을 기록에 저장"""
    if split is None:
        return
    record.payment_cash = split.cash
    record.payment_card = split.card
    record.payment_transfer = split.transfer


def payment_of(record) -> PaymentSplit:
    return PaymentSplit(
        cash=record.payment_cash or 0,
        card=record.payment_card or 0,
        transfer=record.payment_transfer or 0,
    )
