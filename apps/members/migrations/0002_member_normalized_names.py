# Generated manually to search members in the database
from django.db import migrations, models

from apps.members.models import strip_diacritics


def fill_normalized_names(apps, schema_editor):
    Member = apps.get_model('members', 'Member')
    for member in Member.objects.all():
        member.name_normalized = strip_diacritics(member.name)
        member.nickname_normalized = strip_diacritics(member.nickname)
        member.save(update_fields=['name_normalized', 'nickname_normalized'])


class Migration(migrations.Migration):

    dependencies = [
        ('members', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='member',
            name='name_normalized',
            field=models.CharField(db_index=True, default='', editable=False, max_length=100),
            preserve_default=False,
        ),
        migrations.AddField(
            model_name='member',
            name='nickname_normalized',
            field=models.CharField(blank=True, editable=False, max_length=100),
        ),
        migrations.RunPython(fill_normalized_names, migrations.RunPython.noop),
    ]
