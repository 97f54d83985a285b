import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DesignerProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("first_name", models.CharField(max_length=100, verbose_name="First name")),
                ("last_name", models.CharField(blank=True, max_length=100, verbose_name="Last name")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="E-mail")),
                ("title", models.CharField(blank=True, max_length=200, verbose_name="Title")),
                ("city", models.CharField(blank=True, max_length=100, verbose_name="City")),
                ("country", models.CharField(blank=True, max_length=100, verbose_name="Country")),
                ("design_philosophy", models.TextField(blank=True, verbose_name="Design philosophy")),
                ("primary_categories", models.JSONField(blank=True, default=list, verbose_name="Primary categories")),
                ("secondary_categories", models.JSONField(blank=True, default=list, verbose_name="Secondary categories")),
                ("style_keywords", models.JSONField(blank=True, default=list, verbose_name="Style keywords")),
                ("preferred_industries", models.JSONField(blank=True, default=list, verbose_name="Preferred industries")),
                ("preferred_project_sizes", models.JSONField(blank=True, default=list, help_text='Subset of ["small", "medium", "large"]; empty = any size', verbose_name="Preferred project sizes")),
                ("turnaround_times", models.JSONField(blank=True, default=dict, help_text='Typical days per category, e.g. {"branding-logo": 14}', verbose_name="Turnaround times")),
                ("collaboration_style", models.CharField(blank=True, max_length=50, verbose_name="Collaboration style")),
                ("years_experience", models.PositiveSmallIntegerField(default=0, verbose_name="Years of experience")),
                ("rating", models.DecimalField(decimal_places=2, default=0, max_digits=3, verbose_name="Rating")),
                ("total_projects", models.PositiveIntegerField(default=0, verbose_name="Completed projects")),
                ("is_verified", models.BooleanField(default=False, verbose_name="E-mail verified")),
                ("is_approved", models.BooleanField(db_index=True, default=False, verbose_name="Approved")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="Approved at")),
                ("rejection_reason", models.TextField(blank=True, verbose_name="Rejection reason")),
            ],
            options={
                "verbose_name": "Designer",
                "verbose_name_plural": "Designers",
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["is_verified", "is_approved"], name="idx_designer_eligible")],
            },
        ),
    ]
