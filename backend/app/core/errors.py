"""
계산 엔진 예외
"""


class ConfigurationError(ValueError):
    """설정값이 허용 범위를 벗어남 (설정 저장 시점에 거부)"""


class PaymentValidationError(ValueError):
    """결제수단별 금액 검증 실패"""


class NegativePaymentError(PaymentValidationError):
    """음수 결제 금액"""

    def __init__(self, method: str, amount: int):
        self.method = method
        self.amount = amount
        super().__init__(f"{method} 금액은 0 이상이어야 합니다 (입력값: {amount})")


class PaymentMismatchError(PaymentValidationError):
    """결제 합계가 청구 금액과 불일치"""

    def __init__(self, actual_total: int, target_amount: int):
        self.actual_total = actual_total
        self.target_amount = target_amount
        super().__init__(
            f"결제 금액 합계({actual_total:,}원)가 청구 금액({target_amount:,}원)과 일치하지 않습니다"
        )
