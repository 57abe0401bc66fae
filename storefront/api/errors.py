# storefront/api/errors.py
from contextlib import contextmanager

from fastapi import HTTPException

from storefront.domain.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def handle_errors(action: str):
    """
    Maps domain exceptions raised inside a route handler to HTTP errors.
    Anything unexpected is logged and becomes a generic 500.
    """
    try:
        yield
    except HTTPException:
        raise
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception(f"{action} error")
        raise HTTPException(status_code=500, detail="Internal server error")
