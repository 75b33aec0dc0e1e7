from django.contrib import admin

from .models import Profile, SubscriptionPlan, UNLIMITED


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'get_email',
        'plan_id',
        'get_invoice_usage',
        'get_quote_usage',
        'subscription_status',
        'subscription_expires_at',
    ]

    list_display_links = ['user', 'get_email']

    list_filter = ['plan_id', 'subscription_status']

    search_fields = ['user__username', 'user__email']

    fieldsets = [
        ('기본 정보', {
            'fields': ('user', 'plan_id', 'subscription_status', 'subscription_expires_at')
        }),
        ('사용량', {
            'fields': (
                ('invoices_used', 'invoice_quota'),
                ('quotes_used', 'quote_quota'),
                'material_records_used',
            ),
        }),
        ('타임스탬프', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    @admin.display(description='이메일')
    def get_email(self, obj):
        return obj.user.email

    @admin.display(description='인보이스')
    def get_invoice_usage(self, obj):
        return _usage(obj.invoices_used, obj.invoice_quota)

    @admin.display(description='견적서')
    def get_quote_usage(self, obj):
        return _usage(obj.quotes_used, obj.quote_quota)


def _usage(used, quota):
    # 예: 3 / 10, 3 / ∞
    if quota == UNLIMITED:
        return f"{used} / ∞"
    return f"{used} / {quota}"


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'price', 'interval', 'invoice_quota', 'quote_quota', 'is_active']
    list_filter = ['interval', 'is_active']
    search_fields = ['code', 'name']
