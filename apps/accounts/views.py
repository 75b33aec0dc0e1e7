"""
구독 플랜 / 사용량 조회 API
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.core.api import login_required_json

from .models import SubscriptionPlan
from .utils import get_subscription_status


@require_GET
def subscription_plan_list(request):
    """활성 플랜 목록"""
    plans = [plan.to_dict() for plan in SubscriptionPlan.objects.filter(is_active=True)]
    return JsonResponse(plans, safe=False)


@login_required_json
@require_GET
def subscription_status(request):
    """현재 사용자 구독 상태"""
    return JsonResponse(get_subscription_status(request.user))
