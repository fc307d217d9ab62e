"""
Business case API - revenue projections, margin, pricing and signal score
"""

from flask import Blueprint, current_app

from routes.responses import invalid_json_response, json_body, result_response

business_case_bp = Blueprint('business_case', __name__)


def _to_dict(value):
    return value.to_dict()


@business_case_bp.route('/business-case', methods=['POST'])
def business_case():
    """Full business case for a campaign's demand counts"""
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    business_case_service = current_app.services.get('business_case')
    return result_response(business_case_service.calculate(payload), _to_dict)


@business_case_bp.route('/business-case/margin', methods=['POST'])
def margin():
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('business_case').margin(payload)
    return result_response(result, lambda value: {'margin': value})


@business_case_bp.route('/business-case/signal-score', methods=['POST'])
def signal_score():
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('business_case').signal_score(payload)
    return result_response(result, _to_dict)


@business_case_bp.route('/pricing/analysis', methods=['POST'])
def pricing_analysis():
    """Distribution, tiered price points and demand curve for price ceilings"""
    payload = json_body()
    if payload is None:
        return invalid_json_response()

    result = current_app.services.get('business_case').analyze_pricing(payload)
    return result_response(result, _to_dict)
