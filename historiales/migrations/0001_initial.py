import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this to deactivate instead of deleting the account.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(choices=[('admin', 'Administrador'), ('medico', 'Médico')], default='medico', max_length=10)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(db_index=True, max_length=255)),
                ('dni', models.CharField(db_index=True, max_length=8)),
                ('fecha_nacimiento', models.DateField(blank=True, null=True)),
                ('edad', models.PositiveIntegerField(blank=True, null=True)),
                ('sexo', models.CharField(blank=True, choices=[('Masculino', 'Masculino'), ('Femenino', 'Femenino')], max_length=10)),
                ('raza', models.CharField(blank=True, max_length=64, null=True)),
                ('telefono', models.CharField(blank=True, max_length=32, null=True)),
                ('estado_civil', models.CharField(blank=True, max_length=32, null=True)),
                ('lugar_nacimiento', models.CharField(blank=True, max_length=255, null=True)),
                ('grado_instruccion', models.CharField(blank=True, max_length=64, null=True)),
                ('domicilio_actual', models.CharField(blank=True, max_length=255, null=True)),
                ('lugar_procedencia', models.CharField(blank=True, max_length=255, null=True)),
                ('tiempo_procedencia', models.CharField(blank=True, max_length=64, null=True)),
                ('tipo_seguro', models.CharField(blank=True, max_length=64, null=True)),
                ('persona_responsable', models.CharField(blank=True, max_length=255, null=True)),
                ('dni_responsable', models.CharField(blank=True, max_length=8, null=True)),
                ('celular_responsable', models.CharField(blank=True, max_length=32, null=True)),
                ('direccion_responsable', models.CharField(blank=True, max_length=255, null=True)),
                ('estado', models.CharField(default='Activo', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'pacientes',
                'ordering': ['-id'],
            },
        ),
        migrations.CreateModel(
            name='Antecedent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ocupacion', models.CharField(blank=True, max_length=255, null=True)),
                ('religion', models.CharField(blank=True, max_length=64, null=True)),
                ('tabaquismo', models.CharField(blank=True, max_length=64, null=True)),
                ('alcoholismo', models.CharField(blank=True, max_length=64, null=True)),
                ('drogas', models.CharField(blank=True, max_length=64, null=True)),
                ('alimentacion', models.CharField(blank=True, max_length=255, null=True)),
                ('actividad_fisica', models.CharField(blank=True, max_length=255, null=True)),
                ('inmunizaciones', models.TextField(blank=True, null=True)),
                ('diagnostico_previo', models.TextField(blank=True, null=True)),
                ('enfermedades_infancia', models.TextField(blank=True, null=True)),
                ('cirugias_previas', models.TextField(blank=True, null=True)),
                ('alergias', models.TextField(blank=True, null=True)),
                ('medicamentos_actuales', models.TextField(blank=True, null=True)),
                ('menarca', models.CharField(blank=True, max_length=64, null=True)),
                ('ritmo_menstrual', models.CharField(blank=True, max_length=64, null=True)),
                ('uso_anticonceptivos', models.CharField(blank=True, max_length=64, null=True)),
                ('numero_embarazos', models.PositiveIntegerField(blank=True, null=True)),
                ('paciente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='antecedentes', to='historiales.patient')),
            ],
            options={
                'db_table': 'antecedentes',
            },
        ),
        migrations.CreateModel(
            name='Consultation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fecha', models.DateField(db_index=True)),
                ('hora', models.TimeField()),
                ('motivo_consulta', models.TextField()),
                ('presion_arterial', models.CharField(blank=True, max_length=16, null=True)),
                ('pulso', models.PositiveIntegerField(blank=True, null=True)),
                ('temperatura', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('saturacion_o2', models.PositiveIntegerField(blank=True, null=True)),
                ('peso', models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                ('talla', models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                ('examen_fisico', models.TextField(blank=True, null=True)),
                ('diagnostico', models.TextField()),
                ('medicamentos', models.TextField(blank=True, null=True)),
                ('indicaciones', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('paciente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='consultas', to='historiales.patient')),
            ],
            options={
                'db_table': 'consultas',
            },
        ),
    ]
