from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Person',
            fields=[
                ('id', models.IntegerField(primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=500)),
                ('profile_path', models.CharField(blank=True, max_length=500, null=True)),
                ('distinct_show_count', models.IntegerField(default=0)),
                ('is_eligible', models.BooleanField(db_index=True, default=False)),
            ],
            options={
                'verbose_name_plural': 'People',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Show',
            fields=[
                ('id', models.IntegerField(primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=500)),
                ('poster_path', models.CharField(blank=True, max_length=500, null=True)),
                ('popularity_rank', models.IntegerField(default=0)),
            ],
            options={
                'ordering': ['popularity_rank', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Appearance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('episode_count', models.IntegerField(blank=True, null=True)),
                ('guest_episode_count', models.IntegerField(blank=True, null=True)),
                ('kind', models.CharField(blank=True, choices=[('main', 'Main cast'), ('guest', 'Guest star'), ('both', 'Main cast and guest')], max_length=5, null=True)),
                ('person', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appearances', to='catalog.person')),
                ('show', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appearances', to='catalog.show')),
            ],
        ),
        migrations.AddConstraint(
            model_name='appearance',
            constraint=models.UniqueConstraint(fields=('show', 'person'), name='unique_show_person'),
        ),
    ]
