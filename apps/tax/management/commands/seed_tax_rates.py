from django.core.management.base import BaseCommand, CommandError

from apps.tax.models import TaxRate
from apps.tax.utils import DEFAULT_TAX_RATES, get_tax_name

COUNTRY_NAMES = {
    'AT': 'Austria', 'BE': 'Belgium', 'BG': 'Bulgaria', 'HR': 'Croatia',
    'CY': 'Cyprus', 'CZ': 'Czech Republic', 'DK': 'Denmark', 'EE': 'Estonia',
    'FI': 'Finland', 'FR': 'France', 'DE': 'Germany', 'GR': 'Greece',
    'HU': 'Hungary', 'IE': 'Ireland', 'IT': 'Italy', 'LV': 'Latvia',
    'LT': 'Lithuania', 'LU': 'Luxembourg', 'MT': 'Malta', 'NL': 'Netherlands',
    'PL': 'Poland', 'PT': 'Portugal', 'RO': 'Romania', 'SK': 'Slovakia',
    'SI': 'Slovenia', 'ES': 'Spain', 'SE': 'Sweden',
    'GB': 'United Kingdom', 'CH': 'Switzerland', 'NO': 'Norway',
    'US': 'United States', 'CA': 'Canada', 'MX': 'Mexico',
    'AU': 'Australia', 'NZ': 'New Zealand', 'JP': 'Japan', 'SG': 'Singapore',
    'IN': 'India', 'CN': 'China',
    'BR': 'Brazil', 'RU': 'Russia', 'ZA': 'South Africa',
}


class Command(BaseCommand):
    help = '국가별 기본 세율 데이터 생성'

    def add_arguments(self, parser):
        parser.add_argument('--country', help='특정 국가 코드만 생성 (예: GB)')

    def handle(self, *args, **options):
        codes = sorted(DEFAULT_TAX_RATES)

        country = options.get('country')
        if country:
            country = country.upper()
            if country not in DEFAULT_TAX_RATES:
                raise CommandError(f'기본 세율이 없는 국가 코드입니다: {country}')
            codes = [country]

        created = 0
        updated = 0
        for code in codes:
            # 국가+명칭 기준으로 upsert (여러 번 실행해도 중복 생성 없음)
            _, created_flag = TaxRate.objects.update_or_create(
                country_code=code,
                name=get_tax_name(code),
                defaults={
                    'country': COUNTRY_NAMES.get(code, code),
                    'rate': DEFAULT_TAX_RATES[code],
                    'is_default': True,
                },
            )
            if created_flag:
                created += 1
            else:
                updated += 1

        self.stdout.write(
            self.style.SUCCESS(f'세율 생성: {created}개, 업데이트: {updated}개')
        )
