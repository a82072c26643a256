from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class Role(models.TextChoices):
    ADMIN = 'ADMIN', 'Administrator'
    KITCHEN = 'KITCHEN', 'Kitchen owner'
    KITCHEN_STAFF = 'KITCHEN_STAFF', 'Kitchen staff'
    FRANCHISE = 'FRANCHISE', 'Franchise owner'
    FRANCHISE_STAFF = 'FRANCHISE_STAFF', 'Franchise staff'
    AUDITOR = 'AUDITOR', 'Auditor'


FRANCHISE_ROLES = (Role.FRANCHISE, Role.FRANCHISE_STAFF)
KITCHEN_ROLES = (Role.KITCHEN, Role.KITCHEN_STAFF)


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""
    
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user
    
    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', Role.ADMIN)
        
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')
        
        return self.create_user(email, password, **extra_fields)

    def kitchen_recipients(self, vendor_id):
        """Active kitchen owners and staff working for a vendor."""
        return self.filter(
            vendor_id=vendor_id,
            role__in=KITCHEN_ROLES,
            is_active=True,
        )


class User(AbstractBaseUser, PermissionsMixin):
    """Supply-network user: admin, kitchen side or franchise side."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.FRANCHISE_STAFF)
    
    # Tenant affiliation (at most one side is set)
    franchise = models.ForeignKey(
        'franchises.Franchise',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )
    vendor = models.ForeignKey(
        'vendors.Vendor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users'
    )
    employee_id = models.CharField(max_length=50, blank=True)
    
    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)
    
    objects = UserManager()
    
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    
    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='user_email_idx'),
            models.Index(fields=['vendor', 'role'], name='user_vendor_role_idx'),
            models.Index(fields=['franchise', 'role'], name='user_franchise_role_idx'),
        ]
    
    def __str__(self):
        return self.email
    
    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]
