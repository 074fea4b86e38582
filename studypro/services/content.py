import logging

from studypro.core.errors import InvalidSection, NotFound, ValidationError
from studypro.core.plans import CONTENT_SECTIONS, normalize_section
from studypro.models.content import ContentItem
from studypro.repositories.base import Repository
from studypro.utils.dt import utcnow

logger = logging.getLogger(__name__)

# (title, meta, description) rows written when a section is empty
DEFAULT_CONTENT: dict[str, list[tuple[str, str, str]]] = {
    "courses": [
        ("Course batches launching soon", "JEE & NEET", "Free batches of institutes coming soon."),
    ],
    "books": [
        ("Physics Notes", "Download / View", "Concept summaries and solved examples."),
        ("Chemistry Notes", "Download / View", "Physical, organic and inorganic quick revision."),
        ("Biology Notes", "Download / View", "Chapter-wise essentials and diagrams."),
    ],
    "pyqs": [
        ("JEE Main PYQs", "Year-wise + Topic-wise", "Questions grouped by year and subject"),
        ("JEE Advanced PYQs", "Advanced pattern sets", "High-level previous year question sets"),
        ("NEET PYQs", "Year-wise collection", "Medical entrance PYQ practice library"),
    ],
    "mock": [
        ("JEE Main Full-Length", "Questions: 90 | Duration: 180 mins", "Repeated PYQ pattern simulation"),
        ("NEET Full-Length", "Questions: 200 | Duration: 200 mins", "Repeated PYQ pattern simulation"),
    ],
}


def _section_or_raise(section: str) -> str:
    normalized = normalize_section(section)
    if not normalized:
        raise InvalidSection()
    return normalized


def _clean(title: str | None, description: str | None, meta: str | None, status: str | None) -> dict:
    data = {
        "title": str(title or "").strip(),
        "description": str(description or "").strip(),
        "meta": str(meta or "").strip(),
        "status": "draft" if status == "draft" else "published",
    }
    if not data["title"] or not data["description"]:
        raise ValidationError("Title and description are required")
    return data


def seed_content_if_empty(repo: Repository) -> None:
    with repo.transaction():
        for section in CONTENT_SECTIONS:
            if repo.count_content(section):
                continue
            for title, meta, description in DEFAULT_CONTENT[section]:
                repo.add_content(ContentItem(
                    section=section, title=title, meta=meta, description=description, status="published",
                ))
            logger.info("Seeded default %s content", section)


def list_published(repo: Repository, section: str) -> list[ContentItem]:
    return repo.list_content(_section_or_raise(section), published_only=True)


def list_section(repo: Repository, section: str) -> list[ContentItem]:
    return repo.list_content(_section_or_raise(section))


def create_item(repo: Repository, section: str, title=None, description=None, meta=None, status=None) -> ContentItem:
    section = _section_or_raise(section)
    data = _clean(title, description, meta, status)
    now = utcnow()
    with repo.transaction():
        item = repo.add_content(ContentItem(section=section, created_at=now, updated_at=now, **data))
    return item


def update_item(repo: Repository, section: str, item_id: int, title=None, description=None, meta=None, status=None) -> ContentItem:
    section = _section_or_raise(section)
    item = repo.get_content(section, item_id)
    if not item:
        raise NotFound("Item not found")
    data = _clean(title, description, meta, status)
    with repo.transaction():
        for k, v in data.items():
            setattr(item, k, v)
        item.updated_at = utcnow()
    return item


def delete_item(repo: Repository, section: str, item_id: int) -> None:
    section = _section_or_raise(section)
    item = repo.get_content(section, item_id)
    if not item:
        raise NotFound("Item not found")
    with repo.transaction():
        repo.delete_content(item)
    logger.info("Deleted %s item %s", section, item_id)
