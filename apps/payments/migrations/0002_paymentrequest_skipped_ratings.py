# Generated manually to keep attached ratings that fail at settlement
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('payments', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='paymentrequest',
            name='skipped_ratings',
            field=models.JSONField(blank=True, default=list),
        ),
    ]
