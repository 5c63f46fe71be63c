"""
Management command to add the default apparel categories to a company
"""
from django.core.management.base import BaseCommand, CommandError
from atolye.catalog.models import Category
from atolye.companies.models import Company
from atolye.companies.utils import normalize_company_code

DEFAULT_CATEGORIES = [
    'Tişört',
    'Gömlek',
    'Pantolon',
    'Elbise',
    'Etek',
    'Ceket',
    'Mont',
    'Sweatshirt',
    'Eşofman',
    'Aksesuar',
]


class Command(BaseCommand):
    help = "Adds the default apparel categories to a company"

    def add_arguments(self, parser):
        parser.add_argument(
            '--company',
            required=True,
            help='Company code the categories are added to',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help="Delete the company's existing categories first",
        )

    def handle(self, *args, **options):
        code = normalize_company_code(options['company'])
        company = Company.objects.filter(company_code=code).first()
        if company is None:
            raise CommandError(f"Company with code '{code}' not found")

        if options['clear']:
            deleted, _ = Category.objects.filter(company=company).delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing categories"))

        created_count = 0
        skipped_count = 0
        for name in DEFAULT_CATEGORIES:
            _, created = Category.objects.get_or_create(company=company, name=name)
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f"  + {name}"))
            else:
                skipped_count += 1

        self.stdout.write(self.style.SUCCESS(
            f"Done: {created_count} created, {skipped_count} already present for {company.name}"
        ))
