from app.schemas.common import Page, PageParams, Message, project, project_many
