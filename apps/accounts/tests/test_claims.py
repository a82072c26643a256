import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.authentication import ClaimsAuthentication
from apps.accounts.claims import Claims, InvalidClaimsError
from apps.accounts.models import Role, User
from apps.accounts.tokens import issue_access_token


# =============================================================================
# Claims Tests
# =============================================================================

class TestClaims:

    def test_from_payload(self):
        claims = Claims.from_payload({
            'userId': 'u-1',
            'role': 'KITCHEN_STAFF',
            'name': 'Cook',
            'vendor_id': 'v-1',
            'exp': 1700000000,
        })

        assert claims.user_id == 'u-1'
        assert claims.is_kitchen is True
        assert claims.is_franchise is False
        assert claims.kitchen_identity == 'v-1'
        assert claims.exp == 1700000000

    def test_kitchen_identity_falls_back_to_user_id(self):
        claims = Claims.from_payload({'userId': 'k-9', 'role': 'KITCHEN'})

        assert claims.kitchen_identity == 'k-9'

    @pytest.mark.parametrize('payload', [
        {},
        {'userId': 'u-1'},
        {'role': 'ADMIN'},
        {'userId': 'u-1', 'role': 'OWNER'},
    ])
    def test_incomplete_payload_rejected(self, payload):
        with pytest.raises(InvalidClaimsError):
            Claims.from_payload(payload)

    def test_roles(self):
        assert Claims(user_id='a', role=Role.ADMIN).is_admin
        assert Claims(user_id='f', role=Role.FRANCHISE_STAFF).is_franchise
        auditor = Claims(user_id='x', role=Role.AUDITOR)
        assert not (auditor.is_admin or auditor.is_kitchen or auditor.is_franchise)


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokens:

    def test_issued_token_round_trips(self, franchise_staff_user, franchise):
        token = issue_access_token(franchise_staff_user)

        claims = Claims.from_payload(AccessToken(str(token)).payload)

        assert claims.user_id == str(franchise_staff_user.id)
        assert claims.role == Role.FRANCHISE_STAFF
        assert claims.franchise_id == str(franchise.id)
        assert claims.franchise_name == franchise.name
        assert claims.employee_id == 'EMP-F07'
        assert claims.name == 'Cashier'

    def test_authentication_yields_claims(self, kitchen_user):
        validated = AccessToken(str(issue_access_token(kitchen_user)))

        claims = ClaimsAuthentication().get_user(validated)

        assert isinstance(claims, Claims)
        assert claims.is_authenticated is True
        assert claims.vendor_id == str(kitchen_user.vendor_id)

    def test_authentication_rejects_claimless_token(self):
        token = AccessToken()
        token['userId'] = 'u-1'

        with pytest.raises(InvalidToken):
            ClaimsAuthentication().get_user(token)


# =============================================================================
# User Manager Tests
# =============================================================================

@pytest.mark.django_db
class TestUserManager:

    def test_kitchen_recipients(self, vendor_a, kitchen_user, kitchen_staff_user, franchise_user, other_kitchen_user):
        kitchen_staff_user.is_active = False
        kitchen_staff_user.save()

        recipients = list(User.objects.kitchen_recipients(vendor_a.id))

        assert recipients == [kitchen_user]

    def test_superuser_is_admin(self, db):
        user = User.objects.create_superuser(email='root@example.com', password='x')

        assert user.role == Role.ADMIN
        assert user.is_staff is True

    def test_display_name_fallback(self, db):
        user = User.objects.create_user(email='nameless@example.com', password='x')

        assert user.get_display_name() == 'nameless'


# =============================================================================
# Health Check
# =============================================================================

@pytest.mark.django_db
class TestHealthCheck:

    def test_health_is_public(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}

    def test_unknown_route_is_json_404(self, api_client):
        response = api_client.get('/api/no-such-thing/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
