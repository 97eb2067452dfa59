import asyncio
import json

import pytest

from customer_api.utils.error_result import ErrorResult, error_result


def test_error_result_writes_json_body_and_status():
    response = ErrorResult('{"errors": {"id": ["invalid id"]}}', 400)

    assert response.status_code == 400
    assert response.headers["content-type"] == "application/json"
    assert json.loads(response.body) == {"errors": {"id": ["invalid id"]}}


def test_error_result_helper_shape():
    response = error_result("customer", "not found", 404)

    assert response.status_code == 404
    assert json.loads(response.body) == {"errors": {"customer": ["not found"]}}


def test_error_result_requires_http_context():
    response = ErrorResult("{}", 500)

    with pytest.raises(TypeError):
        asyncio.run(response(None, None, None))
