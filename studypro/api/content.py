from fastapi import APIRouter, Depends

from studypro.api.deps import get_repo
from studypro.repositories.sql import SqlRepository
from studypro.schemas.content import ContentListOut, ContentOut
from studypro.services import content

router = APIRouter(prefix="/api/content", tags=["content"])

# Published rows only; listing is public, access gating happens on /api/access
@router.get("/{section}", response_model=ContentListOut)
def list_published(section: str, repo: SqlRepository = Depends(get_repo)):
    rows = content.list_published(repo, section)
    return ContentListOut(section=section.strip().lower(), rows=[ContentOut.model_validate(r) for r in rows])
