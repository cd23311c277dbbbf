from django import forms
from django.contrib.auth import password_validation
from django.contrib.auth.forms import ReadOnlyPasswordHashField
from django.utils.translation import gettext_lazy as _
from .models import User


class UserAdminCreationForm(forms.ModelForm):
    """Admin form for adding staff; the password is entered twice and validated."""

    password1 = forms.CharField(label=_("Password"), widget=forms.PasswordInput)
    password2 = forms.CharField(label=_("Repeat password"), widget=forms.PasswordInput)

    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role")

    def clean_password2(self):
        first = self.cleaned_data.get("password1")
        second = self.cleaned_data.get("password2")
        if first and second and first != second:
            raise forms.ValidationError(_("The two passwords differ."))
        password_validation.validate_password(second, self.instance)
        return second

    def save(self, commit=True):
        staff = super().save(commit=False)
        staff.set_password(self.cleaned_data["password1"])
        if commit:
            staff.save()
        return staff


class UserAdminChangeForm(forms.ModelForm):
    password = ReadOnlyPasswordHashField(
        label=_("Password"),
        help_text=_(
            "Only a hash of the password is stored. Use "
            '<a href="../password/">the password form</a> to set a new one.'
        ),
    )

    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role", "is_active", "is_staff", "is_superuser",
                  "groups", "user_permissions", "last_login", "date_joined")
