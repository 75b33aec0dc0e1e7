from django.contrib import admin

from .models import Client, CompanyProfile


# 삭제된 데이터(Soft Delete)도 관리자에서 볼 수 있게 함
class SoftDeleteAdminMixin:
    def get_queryset(self, request):
        return self.model.objects.all()


@admin.register(CompanyProfile)
class CompanyProfileAdmin(SoftDeleteAdminMixin, admin.ModelAdmin):
    """
    발행 회사 관리
    """
    list_display = ['name', 'user', 'country', 'tax_id', 'get_masked_account', 'is_default', 'is_active']
    list_display_links = ['name']
    list_filter = ['is_active', 'is_default', 'country']
    search_fields = ['name', 'tax_id', 'user__username']

    fieldsets = [
        ('기본 정보', {
            'fields': ('user', 'name', 'tax_id', 'is_default', 'is_active')
        }),
        ('연락처 / 주소', {
            'fields': ('email', 'phone', 'website', 'address', 'city', 'state', 'postal_code', 'country')
        }),
        ('입금 계좌', {
            'fields': (
                'bank_name', 'bank_account_name', 'bank_account_number',
                'bank_routing_number', 'bank_swift_bic', 'bank_iban',
            ),
            'classes': ('collapse',),
        }),
    ]

    @admin.display(description='계좌번호')
    def get_masked_account(self, obj):
        return obj.get_masked_account_number()


@admin.register(Client)
class ClientAdmin(SoftDeleteAdminMixin, admin.ModelAdmin):
    """
    고객 관리
    """
    list_display = ['name', 'user', 'country', 'email', 'get_invoice_count', 'is_active']
    list_filter = ['is_active', 'country']
    search_fields = ['name', 'tax_id', 'email', 'user__username']

    @admin.display(description='인보이스 수')
    def get_invoice_count(self, obj):
        count = obj.invoices.filter(is_active=True).count()
        return f"{count}건"
