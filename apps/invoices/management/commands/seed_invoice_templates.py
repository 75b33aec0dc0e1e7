from django.core.management.base import BaseCommand

from apps.invoices.models import InvoiceTemplate

DEFAULT_TEMPLATES = [
    {'id': 'classic', 'name': 'Classic', 'type': 'both', 'is_default': True, 'is_premium': False},
    {'id': 'modern-blue', 'name': 'Modern Blue', 'type': 'both', 'is_default': False, 'is_premium': False},
    {'id': 'minimal', 'name': 'Minimal', 'type': 'both', 'is_default': False, 'is_premium': False},
    {'id': 'executive', 'name': 'Executive', 'type': 'invoice', 'is_default': False, 'is_premium': True},
    {'id': 'dynamic', 'name': 'Dynamic', 'type': 'invoice', 'is_default': False, 'is_premium': True},
    {'id': 'geometric', 'name': 'Geometric', 'type': 'both', 'is_default': False, 'is_premium': True},
]


class Command(BaseCommand):
    help = '기본 문서 템플릿 생성'

    def handle(self, *args, **kwargs):
        created = 0
        for template_data in DEFAULT_TEMPLATES:
            # 이미 있는 템플릿은 건드리지 않음 (관리자가 수정한 값 보존)
            _, created_flag = InvoiceTemplate.objects.get_or_create(
                id=template_data['id'],
                defaults=template_data,
            )
            if created_flag:
                created += 1

        self.stdout.write(
            self.style.SUCCESS(f'문서 템플릿 생성: {created}개 (전체 {len(DEFAULT_TEMPLATES)}개)')
        )
