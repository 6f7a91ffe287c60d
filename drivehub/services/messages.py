"""User-facing failure and warning texts.

Kept in one module so validators, the store conflict translation and the
tests all agree on the exact wording.
"""

MAIN = "Main"

# drive
DRIVE_NOT_FOUND = "Drive not found"
DRIVE_NAME_REQUIRED = "Drive name is required"
DRIVE_NAME_ALREADY_EXISTS = "Drive name already exists"
DRIVE_NAME_CANNOT_CHANGE = "Drive name cannot be changed"
DRIVE_DATE_CANNOT_CHANGE = "Drive date cannot be changed"
DRIVE_TECH_ROUNDS_CANNOT_CHANGE = "Drive technical rounds cannot be changed"
DRIVE_DATE_REQUIRED = "Drive date is required"
INVALID_DATE = "Invalid date"
FUTURE_DATE_ONLY = "Only today or a future date is allowed"
TECH_ROUNDS_SHOULD_BE = "Technical rounds should be 1 or 2"
INVALID_DRIVE_STATUS = "Invalid drive status"
DRIVE_STATUS_CANNOT_BE_IN_PROPOSAL = "Drive status cannot be changed to InProposal"
DRIVE_STATUS_TRANSITION_ILLEGAL = "Drive status cannot be changed from {current} to {target}"
DRIVE_CANNOT_START_BEFORE_DATE = "Drive cannot start before scheduled date"
CLOSED_DRIVE_CANNOT_BE_EDITED = "Closed drive cannot be edited"
HALTED_DRIVE_CANNOT_BE_EDITED = "Halted drive cannot be edited"
DRIVE_NEEDS_TO_START_FIRST = "Drive needs to be started first"
DRIVE_NOT_IN_PROPOSAL = "Drive is no longer in proposal"
DRIVE_DATE_NOT_IN_FUTURE = "Drive date must be in the future"
DRIVE_NOT_SCHEDULED_TODAY = "Drive is not running today"

# members
NO_HRS = "At least one HR should be added"
NO_PANEL_MEMBERS = "At least one Panel member should be added"
NO_MENTORS = "At least one Mentor should be added"
DUPLICATE_USERS_IN_LIST = "Some duplicate users found in {0} list"
USER_IN_MULTIPLE_LISTS = "Some users are listed in more than one role"
SOME_USERS_NOT_FOUND = "Some users not found"
SOME_USERS_INACTIVE = "Some users are inactive"
SOME_USERS_NOT_IN_ROLE = "Some users are not in the specified role"
SOME_USERS_ON_ANOTHER_DRIVE = "Some users are assigned to another active drive on the same date"
USER_NOT_FOUND = "User not found"
USER_INACTIVE = "User is not active"
USER_NOT_IN_ROLE = "User not in the specified role"
USER_ON_ANOTHER_DRIVE = "User is assigned to another active drive on the same date"
ALREADY_MEMBER = "Already a member of the drive"
INVALID_MEMBER_ROLE = "Members can only be added as HR, Panel or Mentor"
DRIVE_MEMBER_NOT_FOUND = "Drive member not found"
CANNOT_ADD_MEMBER_ON_CLOSED_DRIVE = "Cannot add members to a closed drive"
CANNOT_REMOVE_ON_STARTED_DRIVE = "Cannot remove members or candidates once the drive has started"

# candidates
CANDIDATE_IDS_REQUIRED = "At least one candidate id is required"
CANDIDATE_NOT_FOUND = "Candidate not found"
SOME_CANDIDATES_NOT_FOUND = "Some candidates not found"
CANNOT_ADD_CANDIDATES_ON_CLOSED_DRIVE = "Cannot add candidates to a closed drive"
SOME_CANDIDATE_ALREADY_ADDED = "Some candidate already added to the drive"
DRIVE_CANDIDATE_NOT_FOUND = "Drive candidate not found"
INVALID_CANDIDATE_STATUS = "Invalid candidate status"
CANDIDATE_STATUS_CANNOT_BE_PENDING = "Candidate status cannot be changed to Pending"
ATTENDANCE_NOT_ALLOWED = "Attendance cannot be marked for this candidate"
ATTENDANCE_ALREADY_MARKED = "Attendance already marked"
PHONE_REQUIRED = "Phone is required"
EMAIL_OR_PHONE_ALREADY_EXISTS = "Email or Phone number already exist"
INVALID_EXPERIENCE_LEVEL = "Provided Candidate Experience Level is Invalid"
TECH_STACK_MUST_BE_LIST = "Tech stack must be a list of names"
ONLY_ADMIN_OR_HR_CAN_MANAGE_CANDIDATES = "Only Admin or HR can add or edit candidates"

# rounds and feedback
ROUND_NOT_FOUND = "Interview round not found"
ROUND_CLOSED = "Interview round was closed"
INVALID_ROUND_STATUS = "Invalid round status"
INVALID_ROUND_RESULT = "Invalid round result"
ROUND_STATUS_TRANSITION_ILLEGAL = "Round status cannot be changed from {current} to {target}"
ROUND_RESULT_CANNOT_BE_PENDING = "Round result cannot be changed to Pending"
RESULT_BEFORE_CLOSE = "Need to set Round Result before closing Round"
ROUND_BEFORE_RESULT = "Need to start Round before setting Round Result"
FEEDBACK_ALREADY_PROVIDED = "Feedback already provided"
FEEDBACK_NOT_FOUND = "Feedback not found"
NO_FEEDBACK_FOR_ROUND = "No feedback was provided for the interview round"
INVALID_RECOMMENDATION = "Invalid candidate recommendation"
RECOMMENDATION_REQUIRED = "Recommendation is required"
INVALID_RATING = "Invalid rating number"
RATING_REQUIRED = "{0} is required"
OVERALL_FEEDBACK_REQUIRED = "Overall feedback is required"
FEEDBACK_EDIT_NOT_ALLOWED = "Submitted feedback cannot be edited"

# panel
NO_CANDIDATES_IN_DRIVE = "No candidates in the drive"
NO_PANEL_MEMBERS_IN_DRIVE = "No panel members in the drive"
PANEL_ALREADY_ASSIGNED = "Panel already assigned"
ROUND_ID_INVALID = "Round id must be a valid value"
OLD_INTERVIEWER_REQUIRED = "Old interviewer is required"
NEW_INTERVIEWER_REQUIRED = "New interviewer is required"
NEW_INTERVIEWER_SAME_AS_OLD = "New interviewer cannot be same as old interviewer"
INTERVIEWER_NOT_ASSIGNED = "Interviewer not yet assigned"
INVALID_PANEL_INTERVIEWER = "Invalid panel interviewer"
REASSIGNMENT_APPROVAL_PENDING = "Reassignment applied immediately; approval was requested but no approval workflow exists"

# configuration
UNKNOWN_CONFIG_SECTION = "Unknown configuration section"
UNKNOWN_CONFIG_KEY = "Unknown configuration key"
CONFIG_VALUE_MUST_BE_BOOLEAN = "Value must be true or false"

# authorization
ONLY_ADMIN_OR_HR_CAN_CREATE = "Only Admin or HR can create a drive"
ONLY_ADMIN = "Only Admin can perform this action"
ADMIN_OR_OWNER_CAN_EDIT = "Admin or owner of the drive can edit"
ADMIN_OR_OWNER_CAN_ADD = "Admin or owner of the drive can add"
ADMIN_OR_OWNER_CAN_REMOVE = "Admin or owner of the drive can remove"
ADMIN_OR_OWNER_OR_HR_INTERVIEWER_CAN_EDIT = "Admin or drive owner or HR interviewer can edit"
ADMIN_OR_OWNER_OR_INTERVIEWER_CAN_EDIT = "Admin or drive owner or interviewer can edit"
NOT_ALLOWED_TO_REASSIGN = "Not allowed to reassign interviewers on this drive"
NOT_A_DRIVE_MEMBER = "Only members of the drive can mark attendance"

# sparse patches
FIELD_CANNOT_BE_UPDATED = "{0} cannot be updated"
UNKNOWN_FIELD = "Unknown field"
VALUE_REQUIRED = "{0} should not be null"

# users
EMAIL_REQUIRED = "Email is required"
INVALID_EMAIL = "Invalid email"
EMAIL_ALREADY_EXISTS = "Email already exists"
INVALID_ROLE = "Provided role is invalid"
FULL_NAME_REQUIRED = "Full name is required"
IS_ACTIVE_MUST_BE_BOOLEAN = "is_active must be true or false"
INVALID_CREDENTIALS = "Invalid credentials"

# availability
AVAILABILITY_DATES_REQUIRED = "Availability dates are required"
AVAILABILITY_BEFORE_NEXT_MONDAY = "Availability can only be set from next Monday onwards"
AVAILABILITY_ONLY_FOR_SELF = "Only Admin can set availability for another user"
AVAILABILITY_ALREADY_SET = "Availability already set for some of the dates"
