"""
JSON request/response helpers shared by the API blueprints
"""

from flask import jsonify, request

INVALID_JSON = 'INVALID_JSON'


def json_body():
    """Parsed JSON body, or None when the body is missing or malformed"""
    return request.get_json(silent=True)


def invalid_json_response():
    return jsonify({
        'error': 'Request body must be valid JSON',
        'code': INVALID_JSON
    }), 400


def failure_response(result, status_code: int = 400):
    """Translate a failed Result into a JSON error response"""
    body = {'error': result.error, 'code': result.error_code}
    if result.metadata:
        body['details'] = result.metadata
    return jsonify(body), status_code


def result_response(result, serialize):
    """
    JSON response for a service Result.

    Args:
        result: Result returned by a service
        serialize: Turns the successful data into JSON-ready data

    Returns:
        The serialized data, or a 400 error response for a failure
    """
    result = result.map(serialize)
    if result.is_failure:
        return failure_response(result)
    return jsonify(result.data)
