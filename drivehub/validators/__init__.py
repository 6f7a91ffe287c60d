from .drive import (validate_add_candidates, validate_add_member, validate_create_drive,
                    validate_edit_drive, validate_edit_drive_candidate, validate_edit_drive_config,
                    validate_mark_attendance, validate_remove_candidates, validate_remove_member)
from .panel import validate_auto_assign, validate_reassign
from .rounds import validate_add_feedback, validate_edit_feedback, validate_edit_round
from .users import validate_create_user, validate_edit_user
from .availability import validate_set_availability
from .candidates import validate_create_candidate, validate_edit_candidate
