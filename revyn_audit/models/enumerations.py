from enum import Enum

class AuditCategory(str, Enum):
    STRATEGY_PLANNING = "Strategy & Planning"
    DIGITAL_PRESENCE = "Digital Presence"
    SOCIAL_MEDIA = "Social Media"
    CONTENT_MARKETING = "Content Marketing"
    EMAIL_MARKETING = "Email Marketing"
    ANALYTICS_DATA = "Analytics & Data"
    TECHNOLOGY_TOOLS = "Technology & Tools"
    TEAM_RESOURCES = "Team & Resources"

class QuestionType(str, Enum):
    SCALE = "scale"                      # 0-10 slider
    MULTIPLE_CHOICE = "multiple-choice"  # ranked options, best first
    TEXT = "text"                        # free text, never scored

class MaturityLevel(str, Enum):
    ADVANCED = "advanced"          # >= 80
    DEVELOPING = "developing"      # >= 60
    FOUNDATIONAL = "foundational"  # < 60

class PurchaseStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

class ReportKind(str, Enum):
    MARKETING = "marketing"
    WEBSITE = "website"

class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
