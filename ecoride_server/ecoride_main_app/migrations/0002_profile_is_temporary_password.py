from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('ecoride_main_app', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='profile',
            name='is_temporary_password',
            field=models.BooleanField(default=False),
        ),
    ]
