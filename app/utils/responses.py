from flask import jsonify


def ok(data=None, message=None, status=200, **extra):
    payload = {"data": data, "error": None}
    if message:
        payload["message"] = message
    payload.update(extra)
    return jsonify(payload), status


def error(message, status=400, code=None):
    return jsonify({
        "data": None,
        "error": message,
        "code": code or status
    }), status


def internal_error_response():
    return error("An unexpected error occurred. Please try again later.", status=500)


def validation_error_response(details, message="Invalid request data"):
    return jsonify({
        "data": None,
        "error": message,
        "code": 400,
        "details": details,
    }), 400
