import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.dto import CandidateDTO, EmailPersonalizationDTO, JobDTO

DEFAULT_SENDER_NAME = "The hiring team"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(candidate_name|job_title|calendly_link|sender_name|signature)\s*\}\}")


class TemplateKind(str, Enum):
    APPLICATION_RECEIVED = "application_received"
    SCHEDULE_INTERVIEW = "schedule_interview"
    REJECTION = "rejection"


@dataclass
class EmailMessage:
    to: str
    subject: str
    html: str
    from_address: str
    reply_to: Optional[str] = None

    def metadata(self) -> Dict[str, Any]:
        return {'from': self.from_address, 'reply_to': self.reply_to}


_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1.0"></head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background: {header_color}; padding: 30px; border-radius: 12px 12px 0 0; text-align: center;">
    <h1 style="color: white; margin: 0; font-size: 24px;">{heading}</h1>
  </div>
  <div style="background: #f9fafb; padding: 30px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 12px 12px;">
{content}
  </div>
</body>
</html>
"""

_APPLICATION_RECEIVED_CONTENT = """    <p style="font-size: 16px;">Hi {{candidate_name}},</p>
    <p>Thank you for applying for <strong>{{job_title}}</strong>. We have received your résumé and our team will review it shortly.</p>
    <div style="background: white; border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <h3 style="margin-top: 0; color: #1f2937;">Next steps</h3>
      <ul style="padding-left: 20px; margin-bottom: 0;">
        <li>Our team will review your application</li>
        <li>If your profile is a match, we will reach out to schedule an interview</li>
        <li>You will receive updates by email</li>
      </ul>
    </div>
    <p>If you have any questions, just reply to this email.</p>
    <p style="margin-bottom: 0;">Best regards,<br><strong>{{sender_name}}</strong></p>"""

_SCHEDULE_INTERVIEW_CONTENT = """    <p style="font-size: 16px;">Hi {{candidate_name}},</p>
    <p>Congratulations! You have been selected to move forward in the process for <strong>{{job_title}}</strong>.</p>
    <div style="background: white; border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <h3 style="margin-top: 0; color: #1f2937;">Next step: schedule your interview</h3>
      {{calendly_link}}
    </div>
    <p style="margin-bottom: 0;">Best regards,<br><strong>{{sender_name}}</strong></p>"""

_REJECTION_CONTENT = """    <p style="font-size: 16px;">Hi {{candidate_name}},</p>
    <p>Thank you for your interest in <strong>{{job_title}}</strong> and for the time you put into your application.</p>
    <p>After careful review, we have decided to move forward with other candidates whose profiles more closely match the current needs of this role.</p>
    <p>You are welcome to apply again in the future. We wish you every success in your search.</p>
    <p style="margin-bottom: 0;">Best regards,<br><strong>{{sender_name}}</strong></p>"""

DEFAULT_BODIES = {
    TemplateKind.APPLICATION_RECEIVED: _LAYOUT.format(
        header_color="linear-gradient(135deg, #2563eb 0%, #1d4ed8 100%)",
        heading="Application received",
        content=_APPLICATION_RECEIVED_CONTENT,
    ),
    TemplateKind.SCHEDULE_INTERVIEW: _LAYOUT.format(
        header_color="linear-gradient(135deg, #059669 0%, #047857 100%)",
        heading="You have been selected!",
        content=_SCHEDULE_INTERVIEW_CONTENT,
    ),
    TemplateKind.REJECTION: _LAYOUT.format(
        header_color="linear-gradient(135deg, #4b5563 0%, #374151 100%)",
        heading="An update on your application",
        content=_REJECTION_CONTENT,
    ),
}

DEFAULT_SUBJECTS = {
    TemplateKind.APPLICATION_RECEIVED: "Application received: {{job_title}}",
    TemplateKind.SCHEDULE_INTERVIEW: "You're selected! Schedule your interview - {{job_title}}",
    TemplateKind.REJECTION: "Update on your application: {{job_title}}",
}

# personalization attribute names per kind: (subject, body)
_OVERRIDE_FIELDS = {
    TemplateKind.APPLICATION_RECEIVED: ("application_received_subject", "application_received_body_html"),
    TemplateKind.SCHEDULE_INTERVIEW: ("schedule_interview_subject", "schedule_interview_body_html"),
    TemplateKind.REJECTION: ("rejection_subject", "rejection_body_html"),
}


def render_template(template: str, variables: Dict[str, str], escape: bool = False) -> str:
    """Replace ``{{name}}`` placeholders. Unknown placeholders are left as-is."""
    def _sub(match: "re.Match") -> str:
        value = variables.get(match.group(1)) or ""
        return html.escape(value) if escape else value
    return _PLACEHOLDER_RE.sub(_sub, template)


def append_signature(body: str, signature: Optional[str]) -> str:
    if not signature or not signature.strip():
        return body
    sig = html.escape(signature.strip()).replace("\n", "<br>")
    block = f'<p style="margin-top: 24px;">{sig}</p>'
    if "</body>" in body:
        return body.replace("</body>", f"{block}</body>", 1)
    return body + block


def scheduling_block(calendly_link: Optional[str]) -> str:
    link = (calendly_link or "").strip()
    if not link:
        return ("<p>Our team will send you the scheduling link shortly. "
                "If you have any questions, just reply to this email.</p>")
    safe = html.escape(link, quote=True)
    return (
        "<p>Book your interview using the link below:</p>"
        '<div style="text-align: center; margin: 24px 0;">'
        f'<a href="{safe}" style="display: inline-block; background: #059669; color: white; '
        'padding: 14px 28px; border-radius: 8px; text-decoration: none; font-weight: 600;">'
        "Schedule interview</a></div>"
        "<p>If the button does not open, copy and paste this link into your browser: <br>"
        f'<a href="{safe}" style="color: #2563eb; word-break: break-all;">{safe}</a></p>'
    )


def sender_address(from_email: str, personalization: Optional[EmailPersonalizationDTO]) -> str:
    name = personalization.email_sender_name if personalization else None
    if name and name.strip():
        return f"{name.strip()} <{from_email}>"
    return from_email


class CandidateMessageBuilder:
    """Builds candidate-facing and recruiter-facing emails."""

    def __init__(self, from_email: str, app_url: str):
        self.from_email = from_email
        self.app_url = app_url.rstrip("/")

    def build(
        self,
        kind: TemplateKind,
        candidate: CandidateDTO,
        job: JobDTO,
        personalization: Optional[EmailPersonalizationDTO] = None,
    ) -> EmailMessage:
        p = personalization
        subject_field, body_field = _OVERRIDE_FIELDS[kind]
        subject_tpl = ((getattr(p, subject_field) if p else None) or "").strip() or DEFAULT_SUBJECTS[kind]
        body_tpl = ((getattr(p, body_field) if p else None) or "").strip() or DEFAULT_BODIES[kind]

        variables = {
            "candidate_name": candidate.name,
            "job_title": job.title,
            "sender_name": (p.email_sender_name if p else None) or DEFAULT_SENDER_NAME,
            "signature": (p.email_signature if p else None) or "",
            "calendly_link": (job.calendly_link or "").strip(),
        }

        if kind == TemplateKind.SCHEDULE_INTERVIEW:
            # The scheduling link renders as HTML, so substitute it before escaping the rest
            body_tpl = _PLACEHOLDER_RE.sub(
                lambda m: scheduling_block(job.calendly_link) if m.group(1) == "calendly_link" else m.group(0),
                body_tpl,
            )

        body = render_template(body_tpl, variables, escape=True)
        body = append_signature(body, p.email_signature if p else None)

        return EmailMessage(
            to=candidate.email,
            subject=render_template(subject_tpl, variables),
            html=body,
            from_address=sender_address(self.from_email, p),
            reply_to=p.reply_to_email if p else None,
        )

    def build_recruiter_notification(
        self,
        candidate: CandidateDTO,
        job: JobDTO,
        personalization: Optional[EmailPersonalizationDTO] = None,
    ) -> Optional[EmailMessage]:
        """Fixed-template notice to the job owner. None when the job has no recruiter email."""
        if not job.recruiter_email:
            return None

        name = html.escape(candidate.name)
        title = html.escape(job.title)
        email = html.escape(candidate.email, quote=True)
        link = html.escape(f"{self.app_url}/candidates/{candidate.id}", quote=True)

        content = f"""    <p style="font-size: 16px;">A new application was received:</p>
    <div style="background: white; border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; margin: 20px 0;">
      <table style="width: 100%; border-collapse: collapse;">
        <tr><td style="padding: 8px 0; color: #6b7280;">Job:</td><td style="padding: 8px 0; font-weight: 600;">{title}</td></tr>
        <tr><td style="padding: 8px 0; color: #6b7280;">Candidate:</td><td style="padding: 8px 0; font-weight: 600;">{name}</td></tr>
        <tr><td style="padding: 8px 0; color: #6b7280;">Email:</td><td style="padding: 8px 0;"><a href="mailto:{email}" style="color: #2563eb;">{email}</a></td></tr>
      </table>
    </div>
    <div style="text-align: center; margin-top: 20px;">
      <a href="{link}" style="display: inline-block; background: #2563eb; color: white; padding: 12px 24px; border-radius: 8px; text-decoration: none; font-weight: 600;">View candidate</a>
    </div>"""

        return EmailMessage(
            to=job.recruiter_email,
            subject=f"New application: {candidate.name} - {job.title}",
            html=_LAYOUT.format(
                header_color="linear-gradient(135deg, #059669 0%, #047857 100%)",
                heading="New application",
                content=content,
            ),
            from_address=sender_address(self.from_email, personalization),
        )
