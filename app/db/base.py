# Import all the models, so that Base has them before being
# imported by Alembic or init_db
from app.db.base_class import Base  # noqa
from app.models import (  # noqa
    Partner, Request, Payment, PromoCode, Visitor, Button, Notification
)
