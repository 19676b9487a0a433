"""Vehicle and driver preference serializers"""
from rest_framework import serializers

from ..models import Brand, Vehicle, DriverPreferences


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ['id', 'name']


class VehicleSerializer(serializers.ModelSerializer):
    is_electric = serializers.BooleanField(read_only=True)

    class Meta:
        model = Vehicle
        fields = ['id', 'brand_ref', 'brand', 'model', 'color', 'license_plate',
                  'first_registration_date', 'energy_type', 'seats', 'is_electric', 'created_at']
        read_only_fields = ['created_at']
        extra_kwargs = {'brand': {'required': False, 'allow_blank': True}}

    def validate_seats(self, value):
        if value < 1:
            raise serializers.ValidationError("A vehicle needs at least one passenger seat")
        return value

    def validate(self, data):
        brand_ref = data.get('brand_ref')
        if brand_ref and not data.get('brand'):
            data['brand'] = brand_ref.name
        if not self.partial and not data.get('brand'):
            raise serializers.ValidationError({'brand': 'Give a brand name or pick a known brand'})
        return data


class DriverPreferencesSerializer(serializers.ModelSerializer):
    custom_preferences = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = DriverPreferences
        fields = ['smoking_allowed', 'pets_allowed', 'custom_preferences']
