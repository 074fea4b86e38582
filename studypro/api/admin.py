from fastapi import APIRouter, Depends

from studypro.api.deps import get_current_admin, get_repo
from studypro.models.user import User
from studypro.repositories.sql import SqlRepository
from studypro.schemas.admin import AdminPaymentOut, DeclineIn, OverviewOut
from studypro.schemas.billing import PaymentOut
from studypro.schemas.common import OkOut
from studypro.schemas.content import ContentIn, ContentListOut, ContentOut
from studypro.schemas.user import UserOut
from studypro.services import admin, content

router = APIRouter(prefix="/api/admin", tags=["admin"])

@router.get("/overview", response_model=OverviewOut)
def overview(repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    return admin.overview(repo)

@router.get("/users", response_model=list[UserOut])
def list_users(repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    return admin.list_users(repo)

@router.get("/payments", response_model=list[AdminPaymentOut])
def list_payments(repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    out = []
    for row in admin.list_payments(repo):
        base = PaymentOut.model_validate(row["payment"]).model_dump()
        out.append(AdminPaymentOut(**base, name=row["name"], email=row["email"]))
    return out

@router.post("/payments/{payment_id}/approve", response_model=OkOut)
def approve_payment(payment_id: int, repo: SqlRepository = Depends(get_repo), reviewer: User = Depends(get_current_admin)):
    admin.approve_payment(repo, payment_id, reviewer.id)
    return OkOut()

@router.post("/payments/{payment_id}/decline", response_model=OkOut)
def decline_payment(
    payment_id: int,
    payload: DeclineIn | None = None,
    repo: SqlRepository = Depends(get_repo),
    reviewer: User = Depends(get_current_admin),
):
    admin.decline_payment(repo, payment_id, reviewer.id, payload.reason if payload else "")
    return OkOut()

# ---------------------------
# content rows
# ---------------------------

@router.get("/content/{section}", response_model=ContentListOut)
def list_content(section: str, repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    rows = content.list_section(repo, section)
    return ContentListOut(section=section.strip().lower(), rows=[ContentOut.model_validate(r) for r in rows])

@router.post("/content/{section}", response_model=ContentOut)
def create_content(section: str, payload: ContentIn, repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    return content.create_item(repo, section, **payload.model_dump())

@router.put("/content/{section}/{item_id}", response_model=ContentOut)
def update_content(
    section: str,
    item_id: int,
    payload: ContentIn,
    repo: SqlRepository = Depends(get_repo),
    _: User = Depends(get_current_admin),
):
    return content.update_item(repo, section, item_id, **payload.model_dump())

@router.delete("/content/{section}/{item_id}", response_model=OkOut)
def delete_content(section: str, item_id: int, repo: SqlRepository = Depends(get_repo), _: User = Depends(get_current_admin)):
    content.delete_item(repo, section, item_id)
    return OkOut()
