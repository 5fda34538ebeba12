"""
지출 관리API
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, time
from app.db.database import get_db
from app.models.expense import Expense
from app.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseSummary
from app.core.business_day import DATE_FORMAT, resolve_business_day
from app.core.clock import KST
from app.core.settings import FacilitySettings
from app.api.settings import get_facility_settings

router = APIRouter(prefix="/api/expenses", tags=["지출 관리"])


def _get_expense(db: Session, expense_id: int) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="지출 기록이 존재하지 않습니다")
    return expense


@router.get("", response_model=List[ExpenseResponse])
def get_expenses(
    business_day: Optional[str] = Query(None, description="영업일 (YYYY-MM-DD)"),
    start_date: Optional[str] = Query(None, description="시작 날짜"),
    end_date: Optional[str] = Query(None, description="종료 날짜"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """지출 목록"""
    query = db.query(Expense)

    if business_day:
        query = query.filter(Expense.business_day == business_day)
    if start_date:
        query = query.filter(Expense.date >= start_date)
    if end_date:
        query = query.filter(Expense.date <= end_date)

    return query.order_by(Expense.date.desc(), Expense.time.desc()).offset(skip).limit(limit).all()


@router.get("/summary/{business_day}", response_model=ExpenseSummary)
def get_expense_summary(business_day: str, db: Session = Depends(get_db)):
    """영업일 결제수단별 지출 합계"""
    summary = ExpenseSummary(business_day=business_day)
    for expense in db.query(Expense).filter(Expense.business_day == business_day).all():
        field = f"{expense.payment_method}_total"
        setattr(summary, field, getattr(summary, field) + expense.amount)
        summary.total += expense.amount
    return summary


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    """지출 상세"""
    return _get_expense(db, expense_id)


@router.post("", response_model=ExpenseResponse)
def create_expense(
    expense: ExpenseCreate,
    db: Session = Depends(get_db),
    settings: FacilitySettings = Depends(get_facility_settings)
):
    """지출 등록 (영업일 미입력 시 날짜/시간으로 계산)"""
    business_day = expense.business_day
    if business_day is None:
        local = datetime.combine(expense.date, time.fromisoformat(expense.time), tzinfo=KST)
        business_day = resolve_business_day(local, settings.business_day_start_hour)

    db_expense = Expense(
        date=expense.date.strftime(DATE_FORMAT),
        time=expense.time,
        category=expense.category,
        amount=expense.amount,
        quantity=expense.quantity,
        payment_method=expense.payment_method,
        business_day=business_day,
        notes=expense.notes,
    )
    db.add(db_expense)
    db.commit()
    db.refresh(db_expense)
    return db_expense


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(expense_id: int, expense: ExpenseUpdate, db: Session = Depends(get_db)):
    """지출 수정"""
    db_expense = _get_expense(db, expense_id)

    for key, value in expense.model_dump(exclude_none=True).items():
        setattr(db_expense, key, value)

    db.commit()
    db.refresh(db_expense)
    return db_expense


@router.delete("/{expense_id}")
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    """지출 삭제"""
    db_expense = _get_expense(db, expense_id)
    db.delete(db_expense)
    db.commit()
    return {"message": "지출 기록이 삭제되었습니다"}
