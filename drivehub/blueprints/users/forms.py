from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField
from wtforms.validators import Length, Optional


class CreateUserForm(FlaskForm):
    class Meta:
        csrf = False

    full_name = StringField("Full name", validators=[Optional()])
    email = StringField("Email", validators=[Optional()])
    phone = StringField("Phone", validators=[Optional()])
    role_name = StringField("Role", validators=[Optional()])
    password = PasswordField("Password", validators=[Optional(), Length(min=8)])
