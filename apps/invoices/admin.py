from django.contrib import admin

from .models import Invoice, InvoiceItem, InvoiceTemplate, Quotation, QuotationItem
from .utils import recalculate_totals


class SoftDeleteAdminMixin:
    def get_queryset(self, request):
        return self.model.objects.all()


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    fields = ['description', 'quantity', 'unit_price', 'discount', 'amount', 'sort_order']
    readonly_fields = ['amount']


class QuotationItemInline(admin.TabularInline):
    model = QuotationItem
    extra = 0
    fields = ['description', 'quantity', 'unit_price', 'discount', 'amount', 'sort_order', 'master_item', 'company_item']
    readonly_fields = ['amount']
    raw_id_fields = ['master_item', 'company_item']


class BillingDocumentAdmin(SoftDeleteAdminMixin, admin.ModelAdmin):
    list_filter = ['is_active', 'status', 'country', 'currency']
    readonly_fields = ['subtotal', 'applied_tax_rate', 'tax', 'total', 'created_at', 'updated_at']
    actions = ['recalculate_selected']

    @admin.display(description='합계', ordering='total')
    def get_total_display(self, obj):
        return f"{obj.total:,} {obj.currency}"

    @admin.action(description='선택 문서 금액 재계산')
    def recalculate_selected(self, request, queryset):
        for document in queryset:
            recalculate_totals(document)
        self.message_user(request, f"{queryset.count()}건 재계산 완료")


@admin.register(Invoice)
class InvoiceAdmin(BillingDocumentAdmin):
    """
    인보이스 관리
    """
    list_display = ['invoice_number', 'user', 'client', 'invoice_date', 'due_date', 'status', 'get_total_display', 'is_active']
    date_hierarchy = 'invoice_date'
    search_fields = ['invoice_number', 'client__name', 'user__username']
    inlines = [InvoiceItemInline]


@admin.register(Quotation)
class QuotationAdmin(BillingDocumentAdmin):
    """
    견적서 관리
    """
    list_display = ['quote_number', 'user', 'client', 'quote_date', 'valid_until', 'status', 'get_total_display', 'is_active']
    date_hierarchy = 'quote_date'
    search_fields = ['quote_number', 'client__name', 'user__username']
    inlines = [QuotationItemInline]


@admin.register(InvoiceTemplate)
class InvoiceTemplateAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'type', 'is_default', 'is_premium']
    list_filter = ['type', 'is_premium']
    search_fields = ['id', 'name']
