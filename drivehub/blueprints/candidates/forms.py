from flask_wtf import FlaskForm
from wtforms import Field, StringField
from wtforms.validators import Optional


class StringListField(Field):
    """A JSON array of strings, e.g. a tech stack."""

    def _value(self):
        return ",".join(self.data or [])

    def process_formdata(self, valuelist):
        self.data = list(valuelist)


class CreateCandidateForm(FlaskForm):
    class Meta:
        csrf = False

    full_name = StringField("Full name", validators=[Optional()])
    email = StringField("Email", validators=[Optional()])
    phone = StringField("Phone", validators=[Optional()])
    address = StringField("Address", validators=[Optional()])
    college = StringField("College", validators=[Optional()])
    previous_company = StringField("Previous company", validators=[Optional()])
    experience_level = StringField("Experience level", validators=[Optional()], default="Fresher")
    tech_stack = StringListField("Tech stack")
    resume_url = StringField("Resume", validators=[Optional()])
    linkedin_url = StringField("LinkedIn", validators=[Optional()])
    github_url = StringField("GitHub", validators=[Optional()])
