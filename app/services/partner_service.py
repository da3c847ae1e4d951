from sqlalchemy.orm import Session
from typing import Optional
import logging

from app import models
from app.core.exceptions import NotFoundError
from app.core.monitoring import metrics
from app.schemas import partner as partner_schemas
from app.schemas.common import Page, PageParams, project
from app.services import filters
from app.services.pagination import paginate
from app.services.uniqueness import commit_unique, ensure_unique
from app.services.updates import apply_changes, changes

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("username", "code")

class PartnerService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, partner_id: int) -> models.Partner:
        partner = self.db.query(models.Partner).filter(models.Partner.id == partner_id).first()
        if not partner:
            raise NotFoundError(f"Partner with ID {partner_id} not found")
        return partner

    def create(self, partner_in: partner_schemas.PartnerCreate) -> partner_schemas.Partner:
        data = partner_in.model_dump()
        candidates = {field: data[field] for field in UNIQUE_FIELDS}
        ensure_unique(self.db, models.Partner, candidates, entity="Partner")

        partner = models.Partner(**data)
        self.db.add(partner)
        commit_unique(self.db, models.Partner, candidates, entity="Partner")
        self.db.refresh(partner)

        metrics.increment("partners.created", tags={"requisite_type": partner.requisite_type.value})
        logger.info(f"Partner {partner.id} created with code {partner.code}")
        return project(partner_schemas.Partner, partner)

    def list(self, filter_in: partner_schemas.PartnerFilter, params: PageParams) -> Page[partner_schemas.Partner]:
        where = filters.compose(
            filters.contains(models.Partner.username, filter_in.search),
            filters.date_range(
                filters.timestamp_column(models.Partner, filter_in.filter_by_updated),
                filter_in.date_from,
                filter_in.date_to,
            ),
        )
        query = self.db.query(models.Partner).filter(where)
        return paginate(query, params, partner_schemas.Partner, order_by=models.Partner.created_at.desc())

    def get(self, partner_id: int) -> partner_schemas.Partner:
        return project(partner_schemas.Partner, self._get(partner_id))

    def find_by_code(self, code: str) -> Optional[partner_schemas.Partner]:
        partner = self.db.query(models.Partner).filter(models.Partner.code == code).first()
        return project(partner_schemas.Partner, partner) if partner else None

    def find_by_username(self, username: str) -> Optional[partner_schemas.Partner]:
        partner = self.db.query(models.Partner).filter(models.Partner.username == username).first()
        return project(partner_schemas.Partner, partner) if partner else None

    def update(self, partner_id: int, partner_in: partner_schemas.PartnerUpdate) -> partner_schemas.Partner:
        partner = self._get(partner_id)

        update_data = changes(partner_in, models.Partner)
        candidates = {field: update_data.get(field) for field in UNIQUE_FIELDS}
        ensure_unique(self.db, models.Partner, candidates, entity="Partner", exclude_id=partner_id)

        apply_changes(partner, update_data)

        commit_unique(self.db, models.Partner, candidates, entity="Partner", exclude_id=partner_id)
        self.db.refresh(partner)
        return project(partner_schemas.Partner, partner)

    def delete(self, partner_id: int) -> partner_schemas.Partner:
        partner = self._get(partner_id)
        deleted = project(partner_schemas.Partner, partner)

        self.db.delete(partner)
        self.db.commit()

        logger.info(f"Partner {partner_id} deleted")
        return deleted
