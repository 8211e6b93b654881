from .user import User, UserType
from .company import Company
from .job import Job, SavedJob
from .referral import ReferralRequest, ReferralStatus
from .conversation import Conversation, ConversationParticipant, Message, pair_key
from .notification import Notification

__all__ = [
    'User',
    'UserType',
    'Company',
    'Job',
    'SavedJob',
    'ReferralRequest',
    'ReferralStatus',
    'Conversation',
    'ConversationParticipant',
    'Message',
    'pair_key',
    'Notification',
]
