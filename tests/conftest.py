"""
共享测试夹具：模拟 requests.get，测试过程中不访问网络。
"""

from unittest.mock import MagicMock, patch

import pytest


def make_response(payload=None, json_error=None, status_error=None):
    response = MagicMock()
    response.status_code = 200
    response.raise_for_status = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def mock_get():
    """patch requests.get；用法：mock_get.return_value = make_response({...})"""
    with patch("crypto_ticker.fetchers.client.requests.get") as mocked:
        yield mocked
