import pytest
from smtplib import SMTPException
from django.urls import reverse
from rest_framework import status
from apps.invitations.models import Invitation, InvitationStatus


@pytest.mark.django_db
class TestInvitationList:
    """Tests for GET /api/invitations/?flat={id}"""

    def test_owner_sees_pending(self, owner_client, flat, make_invitation):
        invitation, _ = make_invitation()
        url = reverse('invitations:invitation-list')
        response = owner_client.get(url, {'flat': str(flat.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [item['id'] for item in response.data] == [str(invitation.id)]
        assert 'token_hash' not in response.data[0]

    def test_member_forbidden(self, member_client, flat):
        url = reverse('invitations:invitation-list')
        response = member_client.get(url, {'flat': str(flat.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_flat_param(self, owner_client):
        url = reverse('invitations:invitation-list')
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestInvitationCreate:
    """Tests for POST /api/invitations/"""

    def test_create(self, owner_client, flat, mailoutbox):
        url = reverse('invitations:invitation-list')
        response = owner_client.post(url, {'flat': str(flat.id), 'email': 'friend@example.com'})

        assert response.status_code == status.HTTP_201_CREATED
        assert 'invitation_id' in response.data
        assert 'expires_at' in response.data
        assert Invitation.objects.filter(id=response.data['invitation_id']).exists()
        assert len(mailoutbox) == 1

    def test_member_cannot_invite(self, member_client, flat):
        url = reverse('invitations:invitation-list')
        response = member_client.post(url, {'flat': str(flat.id), 'email': 'friend@example.com'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_email(self, owner_client, flat):
        url = reverse('invitations:invitation-list')
        response = owner_client.post(url, {'flat': str(flat.id), 'email': 'not-an-email'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delivery_failure_is_bad_gateway(self, owner_client, flat, monkeypatch):
        def broken_send_mail(*args, **kwargs):
            raise SMTPException('down')

        monkeypatch.setattr(
            'apps.invitations.services.invitation_management.send_mail',
            broken_send_mail,
        )
        url = reverse('invitations:invitation-list')
        response = owner_client.post(url, {'flat': str(flat.id), 'email': 'friend@example.com'})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert 'error' in response.data


@pytest.mark.django_db
class TestInvitationRevoke:

    def test_revoke(self, owner_client, make_invitation):
        invitation, _ = make_invitation()
        url = reverse('invitations:invitation-revoke', kwargs={'pk': invitation.id})
        response = owner_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == InvitationStatus.REVOKED

    def test_revoke_not_pending(self, owner_client, make_invitation):
        invitation, _ = make_invitation(status=InvitationStatus.ACCEPTED)
        url = reverse('invitations:invitation-revoke', kwargs={'pk': invitation.id})
        response = owner_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invitation is accepted'


@pytest.mark.django_db
class TestInvitationAccept:
    """Tests for POST /api/invitations/accept/"""

    def test_accept(self, invitee_client, invitee, flat, make_invitation):
        _, raw_token = make_invitation()
        url = reverse('invitations:invitation-accept')
        response = invitee_client.post(url, {'token': raw_token})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['flat_id'] == flat.id
        assert flat.has_member(invitee)

    def test_accept_wrong_account(self, member_client, make_invitation):
        _, raw_token = make_invitation()
        url = reverse('invitations:invitation-accept')
        response = member_client.post(url, {'token': raw_token})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_accept_expired(self, invitee_client, make_invitation):
        _, raw_token = make_invitation(expires_in_hours=-1)
        url = reverse('invitations:invitation-accept')
        response = invitee_client.post(url, {'token': raw_token})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invitation expired'

    def test_accept_unknown_token(self, invitee_client):
        url = reverse('invitations:invitation-accept')
        response = invitee_client.post(url, {'token': 'nope'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_accept_requires_auth(self, api_client):
        url = reverse('invitations:invitation-accept')
        response = api_client.post(url, {'token': 'whatever'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
