"""이메일 발송 유틸리티 — SMTP (aiosmtplib) 및 메일 템플릿.

SMTP 설정은 config.py의 SMTP_* 환경 변수로 관리.
SMTP 계정이 없으면 개발 모드로 간주하고 발송 대신 로그만 남긴다.
"""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

import aiosmtplib

from app.config import settings
from app.models.shift import Shift
from app.utils.time_utils import format_hhmm, shift_duration_hours

logger = logging.getLogger(__name__)


async def send_email(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
) -> bool:
    """이메일 발송.

    Args:
        to: 수신자 이메일 주소
        subject: 제목
        html: HTML 본문
        text: 플레인텍스트 본문

    Returns:
        bool: 발송(또는 개발 모드 기록) 성공 여부. SMTP 오류는 로그 후 False.
    """
    if not settings.smtp_configured:
        logger.info("[EMAIL-DEV] To: %s | Subject: %s", to, subject)
        logger.debug("[EMAIL-DEV] Body: %s", text or html[:200])
        return True

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg["To"] = to

    if text:
        msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    try:
        await aiosmtplib.send(
            msg,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            start_tls=True,
        )
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send email to %s: %s", to, exc)
        return False

    logger.info("Email sent to %s: %s", to, subject)
    return True


def invitation_link(token: str) -> str:
    """초대 수락 링크 (Link the invitee opens to accept)."""
    return f"{settings.APP_BASE_URL.rstrip('/')}/accept-invitation?token={token}"


def render_invitation_email(
    company_name: str,
    inviter_name: str,
    role: str,
    token: str,
) -> tuple[str, str, str]:
    """직원 초대 메일 (subject, html, text)을 생성합니다."""
    link: str = invitation_link(token)
    subject: str = f"You've been invited to join {company_name} on ShiftMate"
    html: str = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #3b82f6;">Join {escape(company_name)} on ShiftMate</h2>
        <p>{escape(inviter_name)} has invited you to join <strong>{escape(company_name)}</strong>
        as <strong>{escape(role)}</strong>.</p>
        <p><a href="{escape(link)}"
              style="display: inline-block; padding: 12px 24px; background: #3b82f6;
                     color: white; text-decoration: none; border-radius: 6px;">
            Accept Invitation
        </a></p>
        <p style="color: #666; font-size: 12px;">
            This invitation expires in {settings.INVITATION_EXPIRE_DAYS} days.
        </p>
    </div>
    """
    text: str = (
        f"{inviter_name} has invited you to join {company_name} on ShiftMate as {role}.\n\n"
        f"Accept the invitation: {link}\n\n"
        f"This invitation expires in {settings.INVITATION_EXPIRE_DAYS} days."
    )
    return subject, html, text


def render_roster_email(
    employee_name: str,
    company_name: str,
    week_start: date,
    week_end: date,
    shifts: Sequence[Shift],
) -> tuple[str, str, str]:
    """주간 근무표 메일 (subject, html, text)을 생성합니다.

    Shifts are listed in date order with their duration and the week total.
    """
    ordered: list[Shift] = sorted(shifts, key=lambda s: (s.work_date, s.start_time))
    total: Decimal = sum(
        (shift_duration_hours(s.start_time, s.end_time) for s in ordered), Decimal("0.00")
    )
    subject: str = f"Your Roster Schedule - Week of {week_start:%d %b %Y}"

    rows: list[str] = []
    lines: list[str] = []
    for s in ordered:
        hours: Decimal = shift_duration_hours(s.start_time, s.end_time)
        day: str = f"{s.work_date:%A, %d %b}"
        rows.append(
            "<tr>"
            f"<td>{day}</td><td>{format_hhmm(s.start_time)}</td><td>{format_hhmm(s.end_time)}</td>"
            f"<td>{escape(s.shift_type)}</td><td>{escape(s.location or '-')}</td><td>{hours}h</td>"
            "</tr>"
        )
        lines.append(
            f"- {day}: {format_hhmm(s.start_time)}-{format_hhmm(s.end_time)} "
            f"({s.shift_type}, {s.location or '-'}) {hours}h"
        )

    if rows:
        body_html: str = (
            '<table style="width: 100%; border-collapse: collapse;">'
            "<thead><tr><th>Date</th><th>Start</th><th>End</th><th>Type</th>"
            "<th>Location</th><th>Duration</th></tr></thead>"
            f"<tbody>{''.join(rows)}</tbody></table>"
            f"<p><strong>Total Hours:</strong> {total} hours</p>"
        )
        body_text: str = "\n".join(lines) + f"\n\nTotal Hours: {total} hours"
    else:
        body_html = "<p>You have no shifts scheduled for this week.</p>"
        body_text = "You have no shifts scheduled for this week."

    html: str = f"""
    <div style="font-family: Arial, sans-serif; max-width: 700px; margin: 0 auto;">
        <h2 style="color: #3b82f6;">Your Weekly Roster - {escape(company_name)}</h2>
        <p>Hello {escape(employee_name)}, here is your roster for
        <strong>{week_start:%d %b %Y}</strong> to <strong>{week_end:%d %b %Y}</strong>.</p>
        {body_html}
        <p style="color: #666; font-size: 12px;">
            If you have any questions about your roster, please contact your manager.
        </p>
    </div>
    """
    text: str = (
        f"Hello {employee_name},\n\n"
        f"Your roster at {company_name} for {week_start:%d %b %Y} to {week_end:%d %b %Y}:\n\n"
        f"{body_text}\n"
    )
    return subject, html, text
