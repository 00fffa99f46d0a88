"""Endpoints de datos de recolección (lectura y registro)."""

from flask import Blueprint, jsonify, request

from ..src.errors import ValidationError, ValidationKind
from ..src.utils import coerce_int, split_csv
from ._common import call_with_refresh


bp = Blueprint("collect", __name__)


@bp.get("/collect")
def get_collect():
    """GET /api/collect?from&to&cycle&resourceTypes&resources&attributes&tenantIds&dataType1

    The cycle window is checked against the declared from/to range.
    """
    params = {
        "from": request.args.get("from"),
        "to": request.args.get("to"),
        "cycle": coerce_int(request.args.get("cycle")),
        "resourceTypes": split_csv(request.args.get("resourceTypes")),
        "resources": split_csv(request.args.get("resources")),
        "attributes": split_csv(request.args.get("attributes")),
        "tenantIds": split_csv(request.args.get("tenantIds")),
        "dataType1": coerce_int(request.args.get("dataType1")),
    }
    data = call_with_refresh(lambda client: client.get_collect_data(params))
    return jsonify(data), 200


@bp.post("/collect")
def create_collect():
    """POST /api/collect

    Body: { cycle, dataType1?, resources: [{ resourceId, attributes: [{ attribute, values: [...] }] }] }
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", ValidationKind.BODY)
    data = call_with_refresh(lambda client: client.create_collect_data(body))
    return jsonify(data), 200
