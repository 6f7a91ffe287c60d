from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, Field, IntegerField, StringField
from wtforms.validators import DataRequired, Optional


class IntegerListField(Field):
    """A JSON array of ids. Values that are not integers fail validation."""

    def _value(self):
        return ",".join(str(v) for v in self.data or [])

    def process_formdata(self, valuelist):
        self.data = []
        for value in valuelist:
            try:
                self.data.append(int(value))
            except (TypeError, ValueError):
                self.data = []
                raise ValueError(self.gettext("Not a valid integer list."))


class CreateDriveForm(FlaskForm):
    class Meta:
        csrf = False

    name = StringField("Name", validators=[Optional()])
    drive_date = DateField("Drive date", validators=[Optional()])
    technical_rounds = IntegerField("Technical rounds", validators=[Optional()])
    hr_ids = IntegerListField("HR")
    panel_ids = IntegerListField("Panel")
    mentor_ids = IntegerListField("Mentor")


class AddMemberForm(FlaskForm):
    class Meta:
        csrf = False

    user_id = IntegerField("User", validators=[DataRequired()])
    role = StringField("Role", validators=[DataRequired()])


class CandidateIdsForm(FlaskForm):
    class Meta:
        csrf = False

    candidate_ids = IntegerListField("Candidates")


class ReassignForm(FlaskForm):
    class Meta:
        csrf = False

    old_interviewer_id = IntegerField("Old interviewer", validators=[Optional()])
    new_interviewer_id = IntegerField("New interviewer", validators=[Optional()])
    require_approval = BooleanField("Require approval", default=False)
