"""Turn the third-party seed payload into SaleRecord models."""
import logging
from typing import Any

from pydantic import ValidationError

from salesboard.parse.models import SaleRecord

logger = logging.getLogger(__name__)

# Cap on how many per-item errors are kept in a seed summary
MAX_REPORTED_ERRORS = 20


def parse_records(payload: Any) -> tuple[list[SaleRecord], list[dict[str, Any]]]:
    """
    Validate a decoded JSON payload (a list of objects).

    Invalid items are skipped, never fatal. Returns (records, errors) where
    each error carries the item index and a short reason.
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of records, got {type(payload).__name__}")

    records: list[SaleRecord] = []
    errors: list[dict[str, Any]] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            errors.append({"index": index, "reason": "not an object"})
            continue
        try:
            records.append(SaleRecord.model_validate(item))
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            errors.append({"index": index, "reason": f"invalid fields: {', '.join(fields)}"})

    if errors:
        logger.warning(f"Skipped {len(errors)} of {len(payload)} seed items")
        for error in errors[:5]:
            logger.debug(f"Skipped item {error['index']}: {error['reason']}")

    return records, errors[:MAX_REPORTED_ERRORS]
