# =============================================================================
# businesses/models.py - 발행 회사 정보 및 고객(거래처) 관리
# =============================================================================

"""
인보이스/견적서 발행에 필요한 당사자 정보

- CompanyProfile: 발행 회사 (은행 정보 포함, 사용자별 기본 프로필 1개)
- Client: 인보이스를 받는 고객
"""
import logging
import re

from django.contrib.auth.models import User
from django.db import models, transaction

from apps.core.models import SoftDeleteModel

logger = logging.getLogger(__name__)


def mask_trailing_digits(value, count=5, placeholder="****"):
    """
    뒤에서부터 숫자 count개를 '*'로 마스킹 (입력 형식 유지)

    예: "12-3456-7890" → "12-345*-****"
    """
    if not value:
        return placeholder

    original = str(value)
    if len(re.sub(r'[^0-9]', '', original)) < count:
        return placeholder

    masked = list(original)
    remaining = count
    for i in range(len(masked) - 1, -1, -1):
        if masked[i].isdigit():
            masked[i] = '*'
            remaining -= 1
        if remaining == 0:
            break

    return "".join(masked)


class AddressMixin(models.Model):
    """주소 공통 필드"""

    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=2, blank=True, help_text='ISO-3166 alpha-2 (예: GB)')

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.country = (self.country or '').upper()
        super().save(*args, **kwargs)


class CompanyProfile(AddressMixin, SoftDeleteModel):
    """발행 회사 정보"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='company_profiles', db_index=True)
    name = models.CharField(max_length=200)
    tax_id = models.CharField(max_length=50, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    website = models.URLField(blank=True)
    logo_url = models.URLField(blank=True)

    # 입금 계좌 정보 (인보이스 하단 표시용)
    bank_name = models.CharField(max_length=100, blank=True)
    bank_account_name = models.CharField(max_length=100, blank=True)
    bank_account_number = models.CharField(max_length=50, blank=True)
    bank_routing_number = models.CharField(max_length=50, blank=True)
    bank_swift_bic = models.CharField(max_length=20, blank=True)
    bank_iban = models.CharField(max_length=50, blank=True)

    is_default = models.BooleanField(default=False, db_index=True)

    class Meta:
        db_table = 'company_profiles'
        ordering = ['-is_default', 'name']
        indexes = [
            models.Index(fields=['user', 'is_active', 'is_default'], name='company_user_active_def_idx'),
        ]

    def __str__(self):
        return self.name

    def get_masked_account_number(self):
        return mask_trailing_digits(self.bank_account_number)

    def get_masked_iban(self):
        return mask_trailing_digits(self.bank_iban, count=8)

    def get_bank_details(self):
        """인보이스 요약에 표시할 은행 정보 (비어있는 항목 제외)"""
        details = {
            'bank_name': self.bank_name,
            'account_name': self.bank_account_name,
            'routing_number': self.bank_routing_number,
            'account_number': self.bank_account_number,
            'iban': self.bank_iban,
            'swift_bic': self.bank_swift_bic,
        }
        return {key: value for key, value in details.items() if value}

    @transaction.atomic
    def make_default(self):
        """이 프로필을 기본으로 지정 (기존 기본 프로필 해제)"""
        CompanyProfile.objects.filter(
            user=self.user,
            is_default=True
        ).exclude(pk=self.pk).update(is_default=False)

        self.is_default = True
        self.save(update_fields=['is_default', 'updated_at'])
        logger.info(f"기본 회사 프로필 변경: user={self.user_id}, profile={self.pk}")

    @classmethod
    def default_for(cls, user):
        return cls.active.filter(user=user, is_default=True).first()

    def to_dict(self):
        return {
            'id': self.pk,
            'name': self.name,
            'tax_id': self.tax_id,
            'email': self.email,
            'phone': self.phone,
            'website': self.website,
            'logo_url': self.logo_url,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'country': self.country,
            'bank_name': self.bank_name,
            'bank_account_name': self.bank_account_name,
            'bank_account_number': self.get_masked_account_number(),
            'bank_routing_number': self.bank_routing_number,
            'bank_swift_bic': self.bank_swift_bic,
            'bank_iban': self.get_masked_iban(),
            'is_default': self.is_default,
        }


class Client(AddressMixin, SoftDeleteModel):
    """고객 (인보이스 수신자)"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='clients', db_index=True)
    name = models.CharField(max_length=200, db_index=True)
    tax_id = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'clients'
        ordering = ['name']
        indexes = [
            models.Index(fields=['user', 'is_active', 'name'], name='client_user_active_name_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'name'],
                condition=models.Q(is_active=True),
                name='unique_active_client_name_per_user'
            )
        ]

    def __str__(self):
        return self.name

    def to_dict(self):
        return {
            'id': self.pk,
            'name': self.name,
            'tax_id': self.tax_id,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'country': self.country,
            'notes': self.notes,
        }
