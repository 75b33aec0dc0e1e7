"""
구독 상태 헬퍼
"""
from .models import UNLIMITED, Profile, SubscriptionPlan

FALLBACK_PLAN_NAMES = {
    'free': 'Free Plan',
    'monthly': 'Professional (Monthly)',
    'yearly': 'Professional (Yearly)',
    'per-invoice': 'Pay as you go',
}


def get_plan_name(plan_id, plans=None):
    """
    플랜 이름 조회

    Args:
        plan_id: 플랜 코드
        plans: SubscriptionPlan 목록 (없으면 DB 조회)
    """
    if plans is None:
        plans = SubscriptionPlan.objects.filter(code=plan_id)

    for plan in plans:
        if plan.code == plan_id:
            return plan.name

    return FALLBACK_PLAN_NAMES.get(plan_id, 'Unknown Plan')


def get_subscription_status(user):
    """
    사용자 구독 상태 요약

    Returns:
        {'plan_id', 'plan_name', 'invoices_used', 'invoice_quota',
         'quotes_used', 'quote_quota', 'material_records_used',
         'is_unlimited', 'expires_at', 'status'}
    """
    profile, _ = Profile.objects.get_or_create(user=user)

    return {
        'plan_id': profile.plan_id,
        'plan_name': get_plan_name(profile.plan_id),
        'invoices_used': profile.invoices_used,
        'invoice_quota': profile.invoice_quota,
        'quotes_used': profile.quotes_used,
        'quote_quota': profile.quote_quota,
        'material_records_used': profile.material_records_used,
        'is_unlimited': profile.invoice_quota == UNLIMITED,
        'expires_at': profile.subscription_expires_at,
        'status': profile.subscription_status,
    }
