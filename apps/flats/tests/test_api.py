import pytest
from django.urls import reverse
from rest_framework import status
from apps.flats.models import Flat, FlatMembership, FlatRole


# =============================================================================
# Flat CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestFlatList:
    """Tests for GET /api/flats/"""

    def test_list_returns_user_flats(self, member_client, flat):
        url = reverse('flats:flat-list')
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['name'] == flat.name
        assert response.data['results'][0]['member_count'] == 2

    def test_list_excludes_other_flats(self, outsider_client, flat):
        url = reverse('flats:flat-list')
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    def test_list_unauthenticated(self, api_client):
        url = reverse('flats:flat-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestFlatCreate:
    """Tests for POST /api/flats/"""

    def test_create_flat(self, outsider_client, outsider):
        url = reverse('flats:flat-list')
        response = outsider_client.post(url, {'name': 'New Place', 'description': 'Cosy'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user_role'] == FlatRole.OWNER
        flat = Flat.objects.get(name='New Place')
        assert flat.owner == outsider
        assert flat.has_member(outsider)

    def test_create_flat_requires_name(self, outsider_client):
        url = reverse('flats:flat-list')
        response = outsider_client.post(url, {'name': '   '})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestFlatDetail:
    """Tests for GET/PATCH /api/flats/{id}/"""

    def test_member_can_view(self, member_client, flat):
        url = reverse('flats:flat-detail', kwargs={'pk': flat.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_role'] == FlatRole.MEMBER
        assert response.data['owner']['email'] == 'owner@example.com'

    def test_non_member_forbidden(self, outsider_client, flat):
        url = reverse('flats:flat-detail', kwargs={'pk': flat.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_can_rename(self, owner_client, flat):
        url = reverse('flats:flat-detail', kwargs={'pk': flat.id})
        response = owner_client.patch(url, {'name': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        flat.refresh_from_db()
        assert flat.name == 'Renamed'

    def test_member_cannot_rename(self, member_client, flat):
        url = reverse('flats:flat-detail', kwargs={'pk': flat.id})
        response = member_client.patch(url, {'name': 'Renamed'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_not_allowed(self, owner_client, flat):
        url = reverse('flats:flat-detail', kwargs={'pk': flat.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert Flat.objects.filter(id=flat.id).exists()


# =============================================================================
# Membership Tests
# =============================================================================

@pytest.mark.django_db
class TestFlatMembers:

    def test_list_members(self, member_client, flat):
        url = reverse('flats:flat-members', kwargs={'pk': flat.id})
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [m['role'] for m in response.data] == [FlatRole.OWNER, FlatRole.MEMBER]

    def test_add_member(self, owner_client, flat, outsider):
        url = reverse('flats:flat-add-member', kwargs={'pk': flat.id})
        response = owner_client.post(url, {'email': outsider.email})

        assert response.status_code == status.HTTP_201_CREATED
        assert flat.has_member(outsider)

    def test_add_unknown_email(self, owner_client, flat):
        url = reverse('flats:flat-add-member', kwargs={'pk': flat.id})
        response = owner_client.post(url, {'email': 'ghost@example.com'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'User not found'

    def test_add_existing_member(self, owner_client, flat, member):
        url = reverse('flats:flat-add-member', kwargs={'pk': flat.id})
        response = owner_client.post(url, {'email': member.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_member_cannot_add(self, member_client, flat, outsider):
        url = reverse('flats:flat-add-member', kwargs={'pk': flat.id})
        response = member_client.post(url, {'email': outsider.email})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_remove_member(self, owner_client, flat, member):
        url = reverse('flats:flat-remove-member', kwargs={'pk': flat.id, 'user_id': member.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not FlatMembership.objects.filter(flat=flat, user=member).exists()

    def test_remove_owner_rejected(self, owner_client, flat, owner):
        url = reverse('flats:flat-remove-member', kwargs={'pk': flat.id, 'user_id': owner.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_leave(self, member_client, flat, member):
        url = reverse('flats:flat-leave', kwargs={'pk': flat.id})
        response = member_client.post(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not flat.has_member(member)

    def test_owner_cannot_leave(self, owner_client, flat):
        url = reverse('flats:flat-leave', kwargs={'pk': flat.id})
        response = owner_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
