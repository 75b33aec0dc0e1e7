from decimal import Decimal

from django.core.management.base import BaseCommand

from apps.accounts.models import SubscriptionPlan, UNLIMITED


class Command(BaseCommand):
    help = '기본 구독 플랜 생성'

    def handle(self, *args, **kwargs):
        plans = [
            {
                'code': 'free',
                'name': 'Free Plan',
                'price': Decimal('0'),
                'interval': 'monthly',
                'features': ['5 clients', '10 invoices/month', 'Basic templates', 'PDF generation'],
                'invoice_quota': 10,
                'quote_quota': 5,
                'material_records_limit': 50,
                'includes_central_masters': False,
            },
            {
                'code': 'monthly',
                'name': 'Professional',
                'price': Decimal('9.99'),
                'interval': 'monthly',
                'features': ['Unlimited clients', 'Unlimited invoices', 'All templates', 'Excel import', 'No branding'],
                'invoice_quota': UNLIMITED,
                'quote_quota': UNLIMITED,
                'material_records_limit': UNLIMITED,
                'includes_central_masters': True,
            },
        ]

        created = 0
        for plan_data in plans:
            # 이미 있는 플랜은 건드리지 않음 (관리자가 수정한 값 보존)
            _, created_flag = SubscriptionPlan.objects.get_or_create(
                code=plan_data['code'],
                defaults=plan_data,
            )
            if created_flag:
                created += 1

        self.stdout.write(
            self.style.SUCCESS(f'구독 플랜 생성: {created}개 (전체 {len(plans)}개)')
        )
