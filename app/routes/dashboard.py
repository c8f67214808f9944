# app/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from app.core.deps import get_current_user
from app.db.session import get_db
from app.models.employee import Employee
from app.models.payment import Bulan, Payment
from app.models.student import Student
from app.models.user import User

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

RECENT_ACTIVITY_LIMIT = 10


def _activity_line(b: Bulan) -> str:
    student_name = (b.student.student_full_name if b.student else None) or "Siswa"
    pos = b.payment.pos if b.payment else None
    pos_name = (pos.pos_name if pos else None) or "Payment"
    return f"Pembayaran {student_name} - {pos_name}"


@router.get("")
def dashboard(db: Session = Depends(get_db), _admin: User = Depends(get_current_user)):
    recent = (
        db.query(Bulan)
        .options(joinedload(Bulan.student), joinedload(Bulan.payment).joinedload(Payment.pos))
        .order_by(Bulan.bulan_input_date.desc(), Bulan.bulan_id.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
        .all()
    )

    return {
        "totalStudents": db.query(Student).filter(Student.student_status.is_(True)).count(),
        "totalUsers": db.query(User).filter(User.user_is_deleted.is_(False)).count(),
        "totalPayments": db.query(Payment).count(),
        "totalTeachers": db.query(Employee).filter(Employee.employee_status == 1).count(),
        "recentActivities": [_activity_line(b) for b in recent],
    }
