"""Tests for the /_actions endpoints"""
import pytest
from unittest.mock import patch
from mailpolish.config import MAX_EMAIL_LENGTH


class TestActionAuthentication:
    """Every action requires a session"""

    @pytest.mark.parametrize('action, payload', [
        ('createEmail', {'bodyOriginal': 'Hi'}),
        ('updateEmail', {'id': 'x', 'tone': 'formal'}),
        ('listEmails', {}),
        ('deleteEmail', {'id': 'x'}),
        ('polishEmail', {'id': 'x'}),
    ])
    def test_action_without_session(self, client, action, payload):
        response = client.post(f'/_actions/{action}', json=payload)

        assert response.status_code == 401
        assert response.json()['error']['code'] == 'UNAUTHORIZED'

    def test_action_with_invalid_session(self, client):
        client.cookies.set('session_token', 'not-a-real-token')
        response = client.post('/_actions/listEmails')

        assert response.status_code == 401
        assert response.json()['error']['message'] == 'Invalid session'


class TestEmailActions:
    """Test the create/update/list/delete flow over HTTP"""

    def test_create_update_delete_scenario(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/createEmail', json={'bodyOriginal': 'Hi'})
        assert response.status_code == 200
        created = response.json()['email']
        assert created['id']
        assert created['userId'] == 'user_a'
        assert created['bodyOriginal'] == 'Hi'
        assert created['subject'] is None
        assert created['tone'] is None

        response = client.post('/_actions/updateEmail', json={'id': created['id'], 'tone': 'formal'})
        assert response.status_code == 200
        updated = response.json()['email']
        assert updated['tone'] == 'formal'
        assert updated['bodyOriginal'] == 'Hi'
        assert updated['createdAt'] == created['createdAt']

        response = client.post('/_actions/deleteEmail', json={'id': created['id']})
        assert response.status_code == 200
        assert response.json()['email']['id'] == created['id']

        response = client.post('/_actions/deleteEmail', json={'id': created['id']})
        assert response.status_code == 404
        assert response.json() == {'error': {'code': 'NOT_FOUND', 'message': 'Email not found.'}}

    def test_create_ignores_user_id_in_payload(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/createEmail', json={'bodyOriginal': 'Hi', 'userId': 'user_b'})

        assert response.json()['email']['userId'] == 'user_a'

    def test_create_with_empty_body_is_bad_request(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/createEmail', json={'bodyOriginal': ''})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'BAD_REQUEST'
        assert 'bodyOriginal' in response.json()['error']['message']
        assert client.post('/_actions/listEmails').json() == {'emails': []}

    def test_create_with_oversized_body_is_bad_request(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/createEmail', json={'bodyOriginal': 'x' * (MAX_EMAIL_LENGTH + 1)})

        assert response.status_code == 400

    def test_list_returns_only_callers_emails(self, client, login, user_a, user_b):
        login(client, user_b)
        client.post('/_actions/createEmail', json={'bodyOriginal': 'From B'})

        login(client, user_a)
        client.post('/_actions/createEmail', json={'bodyOriginal': 'From A', 'subject': 'Hello'})
        response = client.post('/_actions/listEmails')

        emails = response.json()['emails']
        assert len(emails) == 1
        assert emails[0]['bodyOriginal'] == 'From A'
        assert emails[0]['subject'] == 'Hello'
        assert emails[0]['userId'] == 'user_a'
        assert emails[0]['createdAt']
        assert emails[0]['updatedAt']

    def test_update_foreign_email_is_not_found(self, client, login, user_a, user_b):
        login(client, user_a)
        email_id = client.post('/_actions/createEmail', json={'bodyOriginal': 'Hi'}).json()['email']['id']

        login(client, user_b)
        response = client.post('/_actions/updateEmail', json={'id': email_id, 'tone': 'rude'})

        assert response.status_code == 404
        assert 'email' not in response.json()

    def test_update_with_null_field_is_bad_request(self, client, login, user_a):
        login(client, user_a)
        email_id = client.post('/_actions/createEmail', json={'bodyOriginal': 'Hi', 'subject': 'Hello'}).json()['email']['id']

        response = client.post('/_actions/updateEmail', json={'id': email_id, 'subject': None})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'BAD_REQUEST'
        assert 'subject' in response.json()['error']['message']
        assert client.post('/_actions/listEmails').json()['emails'][0]['subject'] == 'Hello'

    def test_create_with_null_field_is_bad_request(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/createEmail', json={'bodyOriginal': 'Hi', 'tone': None})

        assert response.status_code == 400
        assert client.post('/_actions/listEmails').json() == {'emails': []}

    def test_update_without_id_is_bad_request(self, client, login, user_a):
        login(client, user_a)

        response = client.post('/_actions/updateEmail', json={'tone': 'formal'})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'BAD_REQUEST'

    def test_polish_email(self, client, login, user_a):
        login(client, user_a)
        email_id = client.post('/_actions/createEmail', json={'bodyOriginal': 'hey can u send the report'}).json()['email']['id']

        with patch('mailpolish.services.email_services.polish_text', return_value='Could you please send the report?'):
            response = client.post('/_actions/polishEmail', json={'id': email_id, 'tone': 'formal'})

        assert response.status_code == 200
        email = response.json()['email']
        assert email['bodyPolished'] == 'Could you please send the report?'
        assert email['bodyOriginal'] == 'hey can u send the report'
        assert email['tone'] == 'formal'


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert '/_actions/createEmail' in response.json()['actions']
