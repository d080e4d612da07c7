"""ORM model for embeddable content pages."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text, func

from devconsole.models.base import Base, new_id, utcnow


class Page(Base):
    """
    Embeddable content record: Power BI report, spreadsheet, or raw HTML.

    Pages are assigned to users through User.assigned_pages.
    """

    __tablename__ = "pages"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False, index=True)
    sub_type = Column(String(32), nullable=True)
    content = Column(Text, nullable=False, default="")
    embed_url = Column(String(2048), nullable=True)
    html_content = Column(Text, nullable=True)
    created_by = Column(String(36), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    allowed_roles = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
