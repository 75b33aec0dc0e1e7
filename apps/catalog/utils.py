"""
중앙 마스터 사용 쿼터 헬퍼
"""
import logging

from django.db import transaction

from apps.accounts.models import Profile

from .models import MaterialUsage

logger = logging.getLogger(__name__)


def check_master_access(user):
    """
    중앙 마스터 조회 가능 여부 (사용량은 늘리지 않음)

    Raises:
        QuotaExceeded: 플랜 미포함 또는 사용량 초과
    """
    profile, _ = Profile.objects.get_or_create(user=user)
    profile.check_material_quota()


@transaction.atomic
def record_master_usage(user, master_item=None, master_term=None, quotation=None):
    """
    중앙 마스터 사용 기록 (쿼터 확인 → 기록 → 사용량 +1)

    호출하는 쪽의 트랜잭션 안에서 실행되므로
    쿼터 초과 시 함께 저장하려던 레코드도 롤백됩니다.

    Raises:
        QuotaExceeded: 플랜 미포함 또는 사용량 초과
    """
    profile, _ = Profile.objects.select_for_update().get_or_create(user=user)
    profile.check_material_quota()

    usage = MaterialUsage.objects.create(
        user=user,
        master_item=master_item,
        master_term=master_term,
        quotation=quotation,
    )
    profile.use_material_record()

    logger.info(
        f"중앙 마스터 사용: user={user.id}, item={getattr(master_item, 'pk', None)}, "
        f"term={getattr(master_term, 'pk', None)}, used={profile.material_records_used}"
    )
    return usage
