from rest_framework import serializers

from clinic.models import User


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})
    password = serializers.CharField(trim_whitespace=False)

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class UserSerializer(serializers.ModelSerializer):
    """Public view of a user; never includes the password hash."""
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'createdAt']
        read_only_fields = fields


class UserWriteSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2, max_length=100,
        error_messages={'min_length': 'Name must be at least 2 characters long'},
    )
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})
    password = serializers.CharField(
        min_length=6, trim_whitespace=False, write_only=True,
        error_messages={'min_length': 'Password must be at least 6 characters long'},
    )
    role = serializers.ChoiceField(
        choices=[c for c, _ in User.ROLE_CHOICES], default=User.ROLE_STAFF,
        error_messages={'invalid_choice': 'Role must be one of: admin, doctor, staff'},
    )

    def validate_name(self, v):
        return v.strip()

    def validate_email(self, v):
        return v.strip().lower()
