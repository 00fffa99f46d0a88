"""Endpoint de datos de plan.

GET /api/plan?from&to&intervalType&resourceTypes&resources&attributes&tenantIds
"""

from flask import Blueprint, jsonify, request

from ..src.utils import coerce_int, split_csv
from ._common import call_with_refresh


bp = Blueprint("plan", __name__)


@bp.get("/plan")
def get_plan():
    params = {
        "from": request.args.get("from"),
        "to": request.args.get("to"),
        "intervalType": coerce_int(request.args.get("intervalType")),
        "resourceTypes": split_csv(request.args.get("resourceTypes")),
        "resources": split_csv(request.args.get("resources")),
        "attributes": split_csv(request.args.get("attributes")),
        "tenantIds": split_csv(request.args.get("tenantIds")),
    }
    data = call_with_refresh(lambda client: client.get_plan_data(params))
    return jsonify(data), 200
