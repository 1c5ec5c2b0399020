import uuid

import django.core.validators
from django.db import migrations, models

import apps.intake.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ContactSubmission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('first_name', models.CharField(max_length=50)),
                ('last_name', models.CharField(max_length=50)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('company', models.CharField(blank=True, max_length=100)),
                ('subject', models.CharField(blank=True, max_length=200)),
                ('message', models.TextField(validators=[django.core.validators.MaxLengthValidator(2000)])),
                ('service', models.CharField(choices=[('general-inquiry', 'General Inquiry'), ('quote-request', 'Quote Request'), ('technical-support', 'Technical Support'), ('partnership', 'Partnership')], default='general-inquiry', max_length=30)),
                ('email_status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('failed', 'Failed')], default='pending', max_length=10)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['-created_at'], name='contact_created_idx'),
                    models.Index(fields=['email'], name='contact_email_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='QuoteSubmission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('first_name', models.CharField(max_length=50)),
                ('last_name', models.CharField(max_length=50)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('company', models.CharField(max_length=100)),
                ('industry', models.CharField(blank=True, choices=[('mining', 'Mining'), ('manufacturing', 'Manufacturing'), ('agriculture', 'Agriculture'), ('water-treatment', 'Water Treatment'), ('food-beverage', 'Food & Beverage'), ('pharmaceuticals', 'Pharmaceuticals'), ('textiles', 'Textiles'), ('other', 'Other')], max_length=30)),
                ('address', models.CharField(blank=True, max_length=200)),
                ('services', models.JSONField(default=list, validators=[apps.intake.validators.validate_quote_services])),
                ('budget', models.CharField(choices=[('under-1000', 'Under $1,000'), ('1000-5000', '$1,000 - $5,000'), ('5000-10000', '$5,000 - $10,000'), ('10000-25000', '$10,000 - $25,000'), ('over-25000', 'Over $25,000'), ('discuss', 'To be discussed')], default='discuss', max_length=20)),
                ('timeline', models.CharField(choices=[('urgent', 'Urgent (1-2 weeks)'), ('normal', 'Normal (1 month)'), ('flexible', 'Flexible (2+ months)'), ('discuss', 'To be discussed')], default='discuss', max_length=20)),
                ('requirements', models.TextField(validators=[django.core.validators.MaxLengthValidator(2000)])),
                ('newsletter', models.BooleanField(default=False)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['-created_at'], name='quote_created_idx'),
                    models.Index(fields=['email'], name='quote_email_idx'),
                ],
            },
        ),
    ]
