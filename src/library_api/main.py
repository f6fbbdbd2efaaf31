import logging

from fastapi import FastAPI

from library_api.api.routes.author_collections import router as author_collections_router
from library_api.api.routes.authors import router as authors_router
from library_api.api.routes.books import router as books_router
from library_api.config import settings
from library_api.errors import register_exception_handlers
from library_api.logging_config import configure_logging
from library_api.middleware import RequestContextMiddleware

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")

app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
)
app.add_middleware(RequestContextMiddleware)
register_exception_handlers(app)
app.include_router(authors_router)
app.include_router(author_collections_router)
app.include_router(books_router)
