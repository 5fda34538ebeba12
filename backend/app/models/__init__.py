"""
데이터베이스 모델
"""
from app.models.locker_log import LockerLog
from app.models.additional_fee_event import AdditionalFeeEvent
from app.models.additional_revenue_item import AdditionalRevenueItem
from app.models.rental_transaction import RentalTransaction
from app.models.locker_group import LockerGroup
from app.models.daily_summary import DailySummary
from app.models.expense import Expense
from app.models.closing_day import ClosingDay
from app.models.system_config import SystemConfig
from app.models.operation_log import OperationLog

__all__ = [
    "LockerLog",
    "AdditionalFeeEvent",
    "AdditionalRevenueItem",
    "RentalTransaction",
    "LockerGroup",
    "DailySummary",
    "Expense",
    "ClosingDay",
    "SystemConfig",
    "OperationLog",
]
