from django.contrib import admin

from .models import TaxRate
from .utils import is_vat_country


@admin.register(TaxRate)
class TaxRateAdmin(admin.ModelAdmin):
    """
    세율 관리
    """
    list_display = ['country_code', 'country', 'name', 'get_rate_display', 'is_default', 'get_is_vat']
    list_display_links = ['country_code', 'country']
    list_filter = ['is_default', 'name']
    search_fields = ['country', 'country_code', 'name']
    ordering = ['country_code', '-is_default']

    @admin.display(description='세율', ordering='rate')
    def get_rate_display(self, obj):
        return f"{obj.rate}%"

    @admin.display(description='VAT 국가', boolean=True)
    def get_is_vat(self, obj):
        return is_vat_country(obj.country_code)
