"""Tests for JSON error rendering."""

import pydantic
import pytest

from core.errors import ValidationError, from_pydantic
from tracker.schemas import RegisterRequest, TaskRequest


class TestErrorResponses:
    def test_unknown_route_is_json_404(self, client):
        resp = client.get('/api/nope')
        assert resp.status_code == 404
        assert 'message' in resp.get_json()

    def test_method_not_allowed_is_json(self, client):
        resp = client.delete('/api/tasks')
        assert resp.status_code == 405
        assert 'message' in resp.get_json()

    def test_non_json_body(self, client, auth_headers):
        resp = client.post('/api/tasks', data='title=x', headers=auth_headers,
                           content_type='text/plain')
        assert resp.status_code == 400
        assert resp.get_json()['message'] == 'Request body must be a JSON object'

    def test_json_array_body_rejected(self, client):
        resp = client.post('/api/auth/register', json=['alice'])
        assert resp.status_code == 400

    def test_api_error_carries_error_id(self, client):
        resp = client.post('/api/auth/login', json={})
        assert resp.get_json()['error_id']

    def test_unexpected_exception_hides_details(self, app):
        @app.route('/boom')
        def boom():
            raise RuntimeError("database password is hunter2")

        resp = app.test_client().get('/boom')
        assert resp.status_code == 500
        data = resp.get_json()
        assert data['message'] == 'Internal server error'
        assert 'hunter2' not in resp.get_data(as_text=True)
        assert data['error_id']


class TestFromPydantic:
    def _convert(self, model, data):
        with pytest.raises(pydantic.ValidationError) as exc:
            model.model_validate(data)
        return from_pydantic(exc.value)

    def test_custom_message_unprefixed(self):
        err = self._convert(TaskRequest, {'title': ''})
        assert isinstance(err, ValidationError)
        assert err.message == 'Task title is required'

    def test_builtin_message_prefixed_with_field(self):
        err = self._convert(RegisterRequest, {'username': 'x' * 500, 'email': 'a@b.c', 'password': 'pw'})
        assert err.message.startswith('username: ')
