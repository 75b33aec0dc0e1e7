"""
사용자 프로필 / 구독 플랜 관리

Django 기본 User 모델을 Profile로 확장하여
구독 플랜과 인보이스/견적서 사용량(쿼터)을 저장합니다.

쿼터 값 -1 은 무제한을 의미합니다.
"""
import logging
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F
from django.utils import timezone

from apps.core.models import TimeStampedModel

logger = logging.getLogger(__name__)

UNLIMITED = -1
PAY_AS_YOU_GO_PLAN = 'per-invoice'


class QuotaExceeded(ValidationError):
    """플랜 사용량 초과 또는 번들 만료"""


class SubscriptionPlan(models.Model):
    """구독 플랜 (free, monthly, yearly, per-invoice)"""

    INTERVAL_CHOICES = [
        ('monthly', '월간'),
        ('yearly', '연간'),
        ('one-time', '1회'),
    ]

    code = models.SlugField(max_length=30, unique=True)
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    interval = models.CharField(max_length=20, choices=INTERVAL_CHOICES, default='monthly')
    features = models.JSONField(default=list, blank=True)
    invoice_quota = models.IntegerField(default=10)
    quote_quota = models.IntegerField(default=10)
    material_records_limit = models.IntegerField(default=UNLIMITED)
    includes_central_masters = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'subscription_plans'
        ordering = ['price', 'code']

    def __str__(self):
        return self.name

    def to_dict(self):
        return {
            'code': self.code,
            'name': self.name,
            'price': str(self.price),
            'interval': self.interval,
            'features': self.features,
            'invoice_quota': self.invoice_quota,
            'quote_quota': self.quote_quota,
            'material_records_limit': self.material_records_limit,
            'includes_central_masters': self.includes_central_masters,
        }


class Profile(TimeStampedModel):
    """사용자 프로필 + 구독 사용량"""

    STATUS_CHOICES = [
        ('active', '활성'),
        ('cancelled', '해지'),
        ('expired', '만료'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')

    plan_id = models.CharField(max_length=30, default='free', db_index=True)
    invoice_quota = models.IntegerField(default=10)
    invoices_used = models.PositiveIntegerField(default=0)
    quote_quota = models.IntegerField(default=10)
    quotes_used = models.PositiveIntegerField(default=0)
    material_records_used = models.PositiveIntegerField(default=0)
    subscription_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    subscription_expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return f"{self.user.username} 프로필"

    @property
    def has_premium_templates(self):
        """무료 플랜 외에는 프리미엄 템플릿 사용 가능"""
        return self.plan_id != 'free'

    # --- 쿼터 ---

    def is_bundle_expired(self, now=None):
        """종량제(per-invoice) 번들 만료 여부"""
        if self.plan_id != PAY_AS_YOU_GO_PLAN or not self.subscription_expires_at:
            return False
        return (now or timezone.now()) > self.subscription_expires_at

    @staticmethod
    def _has_room(used, quota):
        return quota == UNLIMITED or used < quota

    def check_invoice_quota(self):
        """
        인보이스 생성 가능 여부 검사

        Raises:
            QuotaExceeded: 번들 만료 또는 사용량 초과
        """
        if self.is_bundle_expired():
            raise QuotaExceeded('Your invoice bundle has expired', code='bundle_expired')
        if not self._has_room(self.invoices_used, self.invoice_quota):
            raise QuotaExceeded('You have reached your invoice quota for this period', code='invoice_quota')

    def check_quote_quota(self):
        """견적서 생성 가능 여부 검사"""
        if self.is_bundle_expired():
            raise QuotaExceeded('Your quote bundle has expired', code='bundle_expired')
        if not self._has_room(self.quotes_used, self.quote_quota):
            raise QuotaExceeded('You have reached your quote quota for this period', code='quote_quota')

    def use_invoice_quota(self):
        """인보이스 사용량 +1 (F() 표현식으로 동시 요청 시 누락 방지)"""
        Profile.objects.filter(pk=self.pk).update(
            invoices_used=F('invoices_used') + 1,
            updated_at=timezone.now()
        )
        self.refresh_from_db(fields=['invoices_used'])

    def use_quote_quota(self):
        """견적서 사용량 +1"""
        Profile.objects.filter(pk=self.pk).update(
            quotes_used=F('quotes_used') + 1,
            updated_at=timezone.now()
        )
        self.refresh_from_db(fields=['quotes_used'])

    # --- 중앙 마스터(자재/약관) 사용 쿼터 ---

    def get_plan(self):
        return SubscriptionPlan.objects.filter(code=self.plan_id).first()

    def check_material_quota(self, plan=None):
        """
        중앙 마스터 자재/약관 사용 가능 여부 검사

        플랜 한도는 SubscriptionPlan.material_records_limit 기준이며
        플랜 레코드가 없으면 중앙 마스터를 포함하지 않는 것으로 봅니다.

        Raises:
            QuotaExceeded: 플랜 미포함 또는 사용량 초과
        """
        if plan is None:
            plan = self.get_plan()
        if plan is None or not plan.includes_central_masters:
            raise QuotaExceeded(
                'Your subscription plan does not include access to the central repository',
                code='central_masters'
            )
        if not self._has_room(self.material_records_used, plan.material_records_limit):
            raise QuotaExceeded(
                'You have reached your material usage quota for this period',
                code='material_quota'
            )

    def use_material_record(self):
        """중앙 마스터 사용량 +1"""
        Profile.objects.filter(pk=self.pk).update(
            material_records_used=F('material_records_used') + 1,
            updated_at=timezone.now()
        )
        self.refresh_from_db(fields=['material_records_used'])

    def reset_usage(self):
        """기간 갱신 시 사용량 초기화"""
        self.invoices_used = 0
        self.quotes_used = 0
        self.material_records_used = 0
        self.save(update_fields=['invoices_used', 'quotes_used', 'material_records_used', 'updated_at'])
        logger.info(f"사용량 초기화: user={self.user_id}")

    def apply_plan(self, plan):
        """플랜 변경 시 쿼터 복사"""
        self.plan_id = plan.code
        self.invoice_quota = plan.invoice_quota
        self.quote_quota = plan.quote_quota
        self.save(update_fields=['plan_id', 'invoice_quota', 'quote_quota', 'updated_at'])
