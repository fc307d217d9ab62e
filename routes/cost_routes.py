"""
Cost estimation API - cost breakdown, break-even units and price sweeps
"""

from flask import Blueprint, current_app

from routes.responses import invalid_json_response, json_body, result_response
from services.business_case_models import finite_or_none

cost_bp = Blueprint('costs', __name__)


def _break_even_body(units):
    # JSON has no Infinity
    units = finite_or_none(units)
    return {
        'break_even_units': units,
        'achievable': units is not None
    }


@cost_bp.route('/estimate', methods=['POST'])
def estimate():
    """Cost breakdown, profit, margin and ROI"""
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('cost_estimation').estimate(payload)
    return result_response(result, lambda report: report.to_dict())


@cost_bp.route('/break-even', methods=['POST'])
def break_even():
    """Units needed to cover fixed costs; null when it can never happen"""
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('cost_estimation').break_even(payload)
    return result_response(result, _break_even_body)


@cost_bp.route('/profitability', methods=['POST'])
def profitability():
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('cost_estimation').profitability(payload)
    return result_response(result, lambda points: {
        'projections': [point.to_dict() for point in points]
    })
