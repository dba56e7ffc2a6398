"""
Parsing and serialization of the benefit plan json_ext field.

The field is shared by several modules, so parsing is forgiving: a
missing value, invalid or too deeply nested JSON, or JSON that is not an
object all read as an empty document. Serialization is compact and keeps
non-ASCII text as is, which gives the same string the web client writes.
"""

import json
from typing import Any, Dict, Optional

from eligibility_criteria.logging_config import get_logger


logger = get_logger(__name__)

CriteriaDocument = Dict[str, Any]


def parse_extension(extension: Optional[str]) -> CriteriaDocument:
    if extension is None or extension == "":
        return {}

    try:
        document = json.loads(extension)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("unparseable_extension", error=str(e))
        return {}

    if not isinstance(document, dict):
        logger.warning("extension_not_an_object", value_type=type(document).__name__)
        return {}

    return document


def serialize_document(document: CriteriaDocument) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
