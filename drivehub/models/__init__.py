from .user import Role, User
from .candidate import Candidate
from .drive import Drive, DriveMember, DriveCandidate
from .drive_config import DriveRoleConfiguration, PanelVisibilitySettings, NotificationSettings, FeedbackConfiguration
from .round import Round, Feedback
from .reassignment import CandidateReassignment
from .notification import Notification
from .availability import Availability
