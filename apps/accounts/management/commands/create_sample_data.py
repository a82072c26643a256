"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 2 vendors (kitchens) with a small catalog each
- 1 franchise with both vendors assigned (primary + secondary)
- 5 users (admin, kitchen owner, kitchen staff, franchise owner, auditor)

and prints a bearer token for every user.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, Role
from apps.accounts.tokens import issue_access_token
from apps.discrepancies.models import Discrepancy
from apps.franchises.models import Franchise
from apps.notifications.models import Notification
from apps.orders.models import Order
from apps.vendors.models import Vendor, VendorItem


CATALOG = [
    # name, uom, category, vendor price, franchise price
    ('Rice', 'kg', 'Grains', '40.00', '50.00'),
    ('Toor Dal', 'kg', 'Pulses', '95.00', '110.00'),
    ('Sunflower Oil', 'ltr', 'Oils', '120.00', '140.00'),
    ('Onion', 'kg', 'Vegetables', '25.00', '32.00'),
    ('Paneer', 'kg', 'Dairy', '280.00', '320.00'),
]


class Command(BaseCommand):
    help = 'Create sample vendors, a franchise and users with tokens'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        vendors = self.create_vendors()
        franchise = self.create_franchise(vendors)
        users = self.create_users(vendors, franchise)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Bearer tokens:')
        for key, user in users.items():
            self.stdout.write(f'  {key} ({user.role}): {issue_access_token(user)}')

    def clear_data(self):
        """Clear all supply data from the database."""
        Notification.objects.all().delete()
        Discrepancy.objects.all().delete()
        Order.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        Franchise.objects.all().delete()
        Vendor.objects.all().delete()

    def create_vendors(self):
        vendors = {}
        for key, name, markup in [
            ('central', 'Central Kitchen', Decimal('1.00')),
            ('east', 'East Side Kitchen', Decimal('1.05')),
        ]:
            vendor, created = Vendor.objects.get_or_create(
                name=name,
                defaults={'owner_name': f'{name} Owner', 'location': 'Hyderabad'},
            )
            if created:
                VendorItem.objects.bulk_create([
                    VendorItem(
                        vendor=vendor,
                        name=item_name,
                        uom=uom,
                        category=category,
                        vendor_price=(Decimal(vendor_price) * markup).quantize(Decimal('0.01')),
                        franchise_price=Decimal(franchise_price),
                    )
                    for item_name, uom, category, vendor_price, franchise_price in CATALOG
                ])
            vendors[key] = vendor
            self.stdout.write(f'  Vendor: {vendor.name} ({vendor.items.count()} items)')
        return vendors

    def create_franchise(self, vendors):
        franchise, _ = Franchise.objects.get_or_create(
            name='Banjara Hills Outlet',
            defaults={
                'location': 'Road No. 12, Banjara Hills',
                'vendor_1': vendors['central'],
                'vendor_2': vendors['east'],
            },
        )
        self.stdout.write(f'  Franchise: {franchise.name}')
        return franchise

    def create_users(self, vendors, franchise):
        specs = [
            ('admin', 'admin@example.com', 'Admin', Role.ADMIN, {}),
            ('kitchen', 'kitchen@example.com', 'Central Kitchen', Role.KITCHEN,
             {'vendor': vendors['central']}),
            ('kitchen_staff', 'cook@example.com', 'Ravi', Role.KITCHEN_STAFF,
             {'vendor': vendors['central'], 'employee_id': 'EMP-K01'}),
            ('franchise', 'outlet@example.com', 'Banjara Hills', Role.FRANCHISE,
             {'franchise': franchise}),
            ('auditor', 'auditor@example.com', 'Auditor', Role.AUDITOR, {}),
        ]

        users = {}
        for key, email, display_name, role, extra in specs:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(
                    email=email,
                    password='password123',
                    display_name=display_name,
                    role=role,
                    **extra
                )
            users[key] = user
            self.stdout.write(f'  User: {email} ({role})')
        return users
