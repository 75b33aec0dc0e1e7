"""
CompanyProfile / Client 모델 테스트
"""
import pytest
from django.db import IntegrityError

from apps.businesses.models import Client, CompanyProfile, mask_trailing_digits


class TestMaskTrailingDigits:
    """계좌번호 마스킹"""

    @pytest.mark.parametrize("value,count,expected", [
        ('12-3456-7890', 5, '12-345*-****'),
        ('1234567890', 5, '12345*****'),
        ('GB29NWBK60161331926819', 8, 'GB29NWBK601613********'),
        ('1234', 5, '****'),
        ('', 5, '****'),
        (None, 5, '****'),
    ])
    def test_mask(self, value, count, expected):
        assert mask_trailing_digits(value, count=count) == expected


@pytest.mark.django_db
class TestCompanyProfile:

    def test_country_uppercased(self, company_profile):
        assert company_profile.country == 'GB'

    def test_masked_bank_fields(self, company_profile):
        company_profile.bank_iban = 'GB29NWBK60161331926819'

        assert company_profile.get_masked_account_number() == '123*****'
        assert company_profile.get_masked_iban() == 'GB29NWBK601613********'

    def test_bank_details_skip_empty(self, company_profile):
        assert company_profile.get_bank_details() == {
            'bank_name': 'Barclays',
            'account_name': 'Acme Ltd',
            'account_number': '12345678',
            'swift_bic': 'BARCGB22',
        }

    def test_make_default(self, user, company_profile):
        second = CompanyProfile.objects.create(user=user, name='Acme Consulting')

        second.make_default()

        company_profile.refresh_from_db()
        assert company_profile.is_default is False
        assert CompanyProfile.default_for(user) == second

    def test_make_default_keeps_other_users(self, user, other_user, company_profile):
        other = CompanyProfile.objects.create(user=other_user, name='Other', is_default=True)

        CompanyProfile.objects.create(user=user, name='Second').make_default()

        other.refresh_from_db()
        assert other.is_default is True

    def test_default_for_ignores_soft_deleted(self, user, company_profile):
        company_profile.soft_delete()

        assert CompanyProfile.default_for(user) is None
        assert CompanyProfile.objects.filter(pk=company_profile.pk).exists()

    def test_restore(self, user, company_profile):
        company_profile.soft_delete()
        company_profile.restore()

        assert CompanyProfile.default_for(user) == company_profile


@pytest.mark.django_db
class TestClient:

    def test_unique_active_name_per_user(self, user, billing_client):
        with pytest.raises(IntegrityError):
            Client.objects.create(user=user, name='Globex')

    def test_same_name_allowed_after_soft_delete(self, user, billing_client):
        billing_client.soft_delete()

        Client.objects.create(user=user, name='Globex')

        assert Client.active.filter(user=user, name='Globex').count() == 1

    def test_same_name_for_other_user(self, other_user, billing_client):
        Client.objects.create(user=other_user, name='Globex')

        assert Client.objects.filter(name='Globex').count() == 2

    def test_active_manager(self, user, billing_client):
        Client.objects.create(user=user, name='Initech').soft_delete()

        assert list(Client.active.filter(user=user)) == [billing_client]
        assert Client.objects.filter(user=user).count() == 2
