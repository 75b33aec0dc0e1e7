from django.contrib import admin

from .models import CompanyItem, CompanyTerm, MasterItem, MasterTerm, MaterialUsage, QuotationTerm


# 삭제된 데이터(Soft Delete)도 관리자에서 볼 수 있게 함
class SoftDeleteAdminMixin:
    def get_queryset(self, request):
        return self.model.objects.all()


@admin.register(MasterItem)
class MasterItemAdmin(admin.ModelAdmin):
    """
    중앙 마스터 자재/서비스 관리
    """
    list_display = ['code', 'name', 'category', 'unit_of_measure', 'default_price', 'get_usage_count', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['code', 'name', 'description']

    @admin.display(description='사용 횟수')
    def get_usage_count(self, obj):
        return f"{obj.usages.count()}회"


@admin.register(MasterTerm)
class MasterTermAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['title', 'content']


@admin.register(CompanyItem)
class CompanyItemAdmin(SoftDeleteAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'user', 'category', 'price', 'master_item', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'code', 'user__username']
    raw_id_fields = ['master_item']


@admin.register(CompanyTerm)
class CompanyTermAdmin(SoftDeleteAdminMixin, admin.ModelAdmin):
    list_display = ['title', 'user', 'category', 'is_default', 'is_active']
    list_filter = ['is_active', 'is_default', 'category']
    search_fields = ['title', 'user__username']


@admin.register(QuotationTerm)
class QuotationTermAdmin(admin.ModelAdmin):
    list_display = ['title', 'quotation', 'category', 'sort_order']
    search_fields = ['title', 'quotation__quote_number']


@admin.register(MaterialUsage)
class MaterialUsageAdmin(admin.ModelAdmin):
    list_display = ['user', 'master_item', 'master_term', 'quotation', 'used_at']
    list_filter = ['used_at']
    search_fields = ['user__username']
    date_hierarchy = 'used_at'
