import json
import re
from typing import Any
from typing import Dict
from typing import Optional


def get_sui_object_response_fields(resp: Dict[str, Any], type_regex: Optional[str] = None) -> Dict[str, Any]:
    """
    Validate a ``sui_getObject`` response and return its Move fields.

    Args:
        resp (dict): Result of ``sui_getObject`` (or a dynamic field object lookup).
        type_regex (str, optional): Pattern the object's type must match.

    Returns:
        dict: The contents of ``resp['data']['content']['fields']``.

    Raises:
        ValueError: If the response carries an error, has no Move object
            content, or the type does not match ``type_regex``.
    """
    if resp.get('error'):
        raise ValueError(f'response error: {json.dumps(resp, indent=2)}')
    content = (resp.get('data') or {}).get('content') or {}
    if content.get('dataType') != 'moveObject':
        raise ValueError(f'content missing: {json.dumps(resp, indent=2)}')
    if type_regex and not re.search(type_regex, content.get('type', '')):
        raise ValueError(f'wrong object type: {json.dumps(resp, indent=2)}')
    return content.get('fields', {})
