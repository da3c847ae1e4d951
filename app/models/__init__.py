from app.models.models import *  # noqa
