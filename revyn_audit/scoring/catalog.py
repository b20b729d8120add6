"""
Question Catalog - Revyn Audit Platform
revyn_audit/scoring/catalog.py

The fixed 80-question marketing maturity questionnaire across 8 categories.
Multiple-choice options are ranked best first; the scorer relies on
that order. Questions 27, 38 and 68 are free text and never scored.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from revyn_audit.models.audit import Question
from revyn_audit.models.enumerations import AuditCategory, QuestionType


class Catalog:
    """
    Immutable, id-indexed view over a question list.

    Built once and passed explicitly to whatever needs it.
    """

    __slots__ = ("_questions", "_by_id", "_categories")

    def __init__(self, questions: Iterable[Question]):
        questions = tuple(questions)
        by_id: Dict[int, Question] = {}
        for q in questions:
            if q.id in by_id:
                raise ValueError(f"Duplicate question id {q.id}")
            by_id[q.id] = q

        categories: List[str] = []
        for q in questions:
            if q.category.value not in categories:
                categories.append(q.category.value)

        self._questions = questions
        self._by_id = by_id
        self._categories = tuple(categories)

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def categories(self) -> Tuple[str, ...]:
        """Distinct category labels in first-appearance order."""
        return self._categories

    def get(self, question_id: int) -> Optional[Question]:
        return self._by_id.get(question_id)

    def in_category(self, category: str) -> Tuple[Question, ...]:
        return tuple(q for q in self._questions if q.category.value == category)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id


_STRATEGY = AuditCategory.STRATEGY_PLANNING
_DIGITAL = AuditCategory.DIGITAL_PRESENCE
_SOCIAL = AuditCategory.SOCIAL_MEDIA
_CONTENT = AuditCategory.CONTENT_MARKETING
_EMAIL = AuditCategory.EMAIL_MARKETING
_ANALYTICS = AuditCategory.ANALYTICS_DATA
_TECHNOLOGY = AuditCategory.TECHNOLOGY_TOOLS
_TEAM = AuditCategory.TEAM_RESOURCES

_SCALE = QuestionType.SCALE
_CHOICE = QuestionType.MULTIPLE_CHOICE
_TEXT = QuestionType.TEXT


def _q(qid: int, category: AuditCategory, text: str, qtype: QuestionType,
       options: Tuple[str, ...] = ()) -> Question:
    return Question(id=qid, category=category, question=text, type=qtype, options=options)


_QUESTIONS = (
    # Strategy & Planning
    _q(1, _STRATEGY, "Does your company have a clearly defined marketing strategy?", _CHOICE,
       ("Yes, comprehensive strategy", "Basic strategy exists", "Informal approach", "No strategy")),
    _q(2, _STRATEGY, "How well-defined are your target customer personas?", _SCALE),
    _q(3, _STRATEGY, "Do you have documented marketing goals and KPIs?", _CHOICE,
       ("Yes, detailed and tracked", "Basic goals set", "Informal goals", "No clear goals")),
    _q(4, _STRATEGY, "How often do you review and update your marketing strategy?", _CHOICE,
       ("Quarterly", "Bi-annually", "Annually", "Rarely/Never")),
    _q(5, _STRATEGY, "What percentage of your revenue is allocated to marketing?", _CHOICE,
       ("10%+", "5-10%", "2-5%", "Less than 2%")),
    _q(6, _STRATEGY, "Do you have a competitive analysis framework?", _CHOICE,
       ("Comprehensive framework", "Basic analysis", "Informal monitoring", "No analysis")),
    _q(7, _STRATEGY, "How aligned is your marketing with sales objectives?", _SCALE),
    _q(8, _STRATEGY, "Do you have a documented brand positioning statement?", _CHOICE,
       ("Yes, well-defined", "Basic positioning", "Informal understanding", "No positioning")),
    _q(9, _STRATEGY, "How do you prioritize marketing initiatives?", _CHOICE,
       ("Data-driven framework", "ROI-based decisions", "Management intuition", "Ad-hoc decisions")),
    _q(10, _STRATEGY, "What is your primary marketing objective?", _CHOICE,
       ("Lead generation", "Brand awareness", "Customer retention", "Revenue growth")),
    # Digital Presence
    _q(11, _DIGITAL, "How would you rate your website's user experience?", _SCALE),
    _q(12, _DIGITAL, "Is your website mobile-optimized?", _CHOICE,
       ("Fully responsive", "Mostly optimized", "Basic mobile view", "Not optimized")),
    _q(13, _DIGITAL, "How fast does your website load?", _CHOICE,
       ("Under 2 seconds", "2-3 seconds", "3-5 seconds", "Over 5 seconds")),
    _q(14, _DIGITAL, "Do you have SEO optimization in place?", _CHOICE,
       ("Comprehensive SEO", "Basic optimization", "Minimal SEO", "No SEO")),
    _q(15, _DIGITAL, "How often do you update your website content?", _CHOICE,
       ("Weekly", "Monthly", "Quarterly", "Rarely")),
    _q(16, _DIGITAL, "Do you have a blog or content hub?", _CHOICE,
       ("Active blog with regular posts", "Occasional blog posts", "Static content only", "No blog")),
    _q(17, _DIGITAL, "How effective is your website at converting visitors?", _SCALE),
    _q(18, _DIGITAL, "Do you have clear calls-to-action on your website?", _CHOICE,
       ("Strategic CTAs throughout", "Some CTAs present", "Minimal CTAs", "No clear CTAs")),
    _q(19, _DIGITAL, "Is your website accessible (WCAG compliant)?", _CHOICE,
       ("Fully compliant", "Mostly accessible", "Basic accessibility", "Not considered")),
    _q(20, _DIGITAL, "Do you have a search function on your website?", _CHOICE,
       ("Advanced search with filters", "Basic search", "Simple search", "No search")),
    _q(21, _DIGITAL, "How secure is your website?", _CHOICE,
       ("SSL + security measures", "SSL certificate only", "Basic security", "Unsure about security")),
    _q(22, _DIGITAL, "Do you have website analytics set up?", _CHOICE,
       ("Comprehensive analytics", "Google Analytics", "Basic tracking", "No analytics")),
    _q(23, _DIGITAL, "How well does your website represent your brand?", _SCALE),
    _q(24, _DIGITAL, "Do you have landing pages for campaigns?", _CHOICE,
       ("Dedicated landing pages", "Some campaign pages", "Generic pages", "No landing pages")),
    _q(25, _DIGITAL, "Is your contact information easily accessible?", _CHOICE,
       ("Multiple contact options", "Basic contact info", "Limited contact info", "Hard to find")),
    # Social Media
    _q(26, _SOCIAL, "How active is your company on social media?", _SCALE),
    _q(27, _SOCIAL, "Which social media platforms do you use?", _TEXT),
    _q(28, _SOCIAL, "How often do you post on social media?", _CHOICE,
       ("Daily", "Several times per week", "Weekly", "Rarely")),
    _q(29, _SOCIAL, "Do you have a social media content strategy?", _CHOICE,
       ("Comprehensive strategy", "Basic content plan", "Informal approach", "No strategy")),
    _q(30, _SOCIAL, "How do you measure social media success?", _CHOICE,
       ("Comprehensive metrics", "Basic engagement", "Follower count", "No measurement")),
    _q(31, _SOCIAL, "Do you engage with your audience on social media?", _SCALE),
    _q(32, _SOCIAL, "Do you use social media for customer service?", _CHOICE,
       ("Dedicated support", "Respond when possible", "Rarely respond", "No social support")),
    _q(33, _SOCIAL, "How consistent is your brand voice across platforms?", _SCALE),
    _q(34, _SOCIAL, "Do you use social media advertising?", _CHOICE,
       ("Regular paid campaigns", "Occasional ads", "Boosted posts only", "No paid social")),
    _q(35, _SOCIAL, "Do you monitor social media mentions of your brand?", _CHOICE,
       ("Active monitoring tools", "Manual monitoring", "Occasional checks", "No monitoring")),
    # Content Marketing
    _q(36, _CONTENT, "Do you have a content marketing strategy?", _CHOICE,
       ("Comprehensive strategy", "Basic content plan", "Informal approach", "No strategy")),
    _q(37, _CONTENT, "How often do you create new content?", _CHOICE,
       ("Daily", "Weekly", "Monthly", "Rarely")),
    _q(38, _CONTENT, "What types of content do you create?", _TEXT),
    _q(39, _CONTENT, "How do you measure content performance?", _CHOICE,
       ("Comprehensive analytics", "Basic metrics", "Views/downloads only", "No measurement")),
    _q(40, _CONTENT, "Do you repurpose content across channels?", _CHOICE,
       ("Strategic repurposing", "Some repurposing", "Minimal repurposing", "No repurposing")),
    _q(41, _CONTENT, "How well does your content address customer pain points?", _SCALE),
    _q(42, _CONTENT, "Do you have a content calendar?", _CHOICE,
       ("Detailed calendar", "Basic planning", "Informal schedule", "No calendar")),
    _q(43, _CONTENT, "How original is your content?", _SCALE),
    _q(44, _CONTENT, "Do you optimize content for SEO?", _CHOICE,
       ("Full SEO optimization", "Basic optimization", "Minimal SEO", "No SEO")),
    _q(45, _CONTENT, "How do you distribute your content?", _CHOICE,
       ("Multi-channel distribution", "Website and social", "Website only", "Limited distribution")),
    # Email Marketing
    _q(46, _EMAIL, "Do you have an email marketing program?", _CHOICE,
       ("Comprehensive program", "Basic email campaigns", "Occasional emails", "No email marketing")),
    _q(47, _EMAIL, "How do you segment your email list?", _CHOICE,
       ("Advanced segmentation", "Basic segments", "Minimal segmentation", "No segmentation")),
    _q(48, _EMAIL, "What is your average email open rate?", _CHOICE,
       ("Above 25%", "20-25%", "15-20%", "Below 15%")),
    _q(49, _EMAIL, "Do you personalize your email content?", _SCALE),
    _q(50, _EMAIL, "How often do you send marketing emails?", _CHOICE,
       ("Weekly", "Bi-weekly", "Monthly", "Rarely")),
    _q(51, _EMAIL, "Do you have automated email sequences?", _CHOICE,
       ("Multiple automations", "Basic automation", "Welcome series only", "No automation")),
    _q(52, _EMAIL, "How mobile-friendly are your emails?", _SCALE),
    _q(53, _EMAIL, "Do you A/B test your email campaigns?", _CHOICE,
       ("Regular testing", "Occasional testing", "Rarely test", "No testing")),
    # Analytics & Data
    _q(54, _ANALYTICS, "How comprehensive is your marketing analytics setup?", _SCALE),
    _q(55, _ANALYTICS, "Do you track customer acquisition costs?", _CHOICE,
       ("Detailed CAC tracking", "Basic cost tracking", "Rough estimates", "No tracking")),
    _q(56, _ANALYTICS, "How do you measure ROI on marketing activities?", _CHOICE,
       ("Comprehensive ROI analysis", "Basic ROI tracking", "Revenue attribution", "No ROI measurement")),
    _q(57, _ANALYTICS, "Do you have a customer data platform?", _CHOICE,
       ("Integrated CDP", "CRM system", "Basic database", "No centralized data")),
    _q(58, _ANALYTICS, "How often do you review marketing metrics?", _CHOICE,
       ("Daily", "Weekly", "Monthly", "Quarterly")),
    _q(59, _ANALYTICS, "Do you use predictive analytics?", _CHOICE,
       ("Advanced predictive models", "Basic forecasting", "Trend analysis", "No predictive analytics")),
    _q(60, _ANALYTICS, "How well do you understand your customer journey?", _SCALE),
    _q(61, _ANALYTICS, "Do you track lifetime value of customers?", _CHOICE,
       ("Detailed LTV analysis", "Basic LTV tracking", "Revenue per customer", "No LTV tracking")),
    _q(62, _ANALYTICS, "How do you attribute conversions across channels?", _CHOICE,
       ("Multi-touch attribution", "Last-click attribution", "First-click attribution", "No attribution")),
    _q(63, _ANALYTICS, "Do you have marketing dashboards?", _CHOICE,
       ("Real-time dashboards", "Weekly reports", "Monthly reports", "No regular reporting")),
    _q(64, _ANALYTICS, "How data-driven are your marketing decisions?", _SCALE),
    _q(65, _ANALYTICS, "Do you conduct marketing experiments?", _CHOICE,
       ("Regular A/B testing", "Occasional testing", "Informal experiments", "No testing")),
    # Technology & Tools
    _q(66, _TECHNOLOGY, "How integrated are your marketing tools?", _SCALE),
    _q(67, _TECHNOLOGY, "Do you use marketing automation?", _CHOICE,
       ("Advanced automation", "Basic automation", "Email automation only", "No automation")),
    _q(68, _TECHNOLOGY, "What CRM system do you use?", _TEXT),
    _q(69, _TECHNOLOGY, "How satisfied are you with your current marketing tech stack?", _SCALE),
    _q(70, _TECHNOLOGY, "Do you use AI tools in your marketing?", _CHOICE,
       ("Multiple AI tools", "Some AI assistance", "Exploring AI", "No AI tools")),
    _q(71, _TECHNOLOGY, "How do you manage your marketing projects?", _CHOICE,
       ("Project management software", "Spreadsheets", "Email coordination", "Informal management")),
    _q(72, _TECHNOLOGY, "Do you have a centralized asset management system?", _CHOICE,
       ("Digital asset management", "Cloud storage", "Shared folders", "No centralized system")),
    _q(73, _TECHNOLOGY, "How do you handle marketing compliance and approvals?", _CHOICE,
       ("Automated workflows", "Manual approval process", "Informal reviews", "No formal process")),
    # Team & Resources
    _q(74, _TEAM, "How large is your marketing team?", _CHOICE,
       ("10+ people", "5-10 people", "2-5 people", "1 person or less")),
    _q(75, _TEAM, "Do you work with external marketing agencies?", _CHOICE,
       ("Multiple agencies", "One main agency", "Freelancers", "All in-house")),
    _q(76, _TEAM, "How skilled is your team in digital marketing?", _SCALE),
    _q(77, _TEAM, "Do you have dedicated roles for different marketing functions?", _CHOICE,
       ("Specialized roles", "Some specialization", "Generalists", "One person handles all")),
    _q(78, _TEAM, "How often does your team receive marketing training?", _CHOICE,
       ("Regular training", "Annual training", "Occasional training", "No formal training")),
    _q(79, _TEAM, "How well-defined are marketing roles and responsibilities?", _SCALE),
    _q(80, _TEAM, "What is your biggest marketing resource constraint?", _CHOICE,
       ("Budget", "Time", "Skills/expertise", "Technology")),
)


def build_catalog() -> Catalog:
    """Build the standard marketing audit catalog."""
    return Catalog(_QUESTIONS)


AUDIT_CATALOG = build_catalog()
