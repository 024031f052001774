import logging

from movies.core.config import get_settings

# Setup basic logging before the app imports so startup errors are captured
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from movies.main import app  # noqa: E402

logger.info("Movies API entrypoint initialized")

# This is the entry point for serverless hosting (Vercel and similar)
# It exports the FastAPI app instance
__all__ = ["app"]
