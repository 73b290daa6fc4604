"""Activation email templates: context → subject, HTML body and plain-text body (Jinja)."""

from __future__ import annotations

from datetime import date

from jinja2 import Environment, StrictUndefined

from villagetech.application.dtos.notification import ActivationEmailContext, RenderedEmail

SUBJECT_TEMPLATE = "Welcome to {{ tenant_name }} - Your Admin Portal Access"

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{{ tenant_name }} - Admin Portal Access</title>
</head>
<body style="font-family: Arial, sans-serif; color: #333; line-height: 1.6; max-width: 600px; margin: 0 auto;">
  <div style="background: #4f46e5; color: #fff; padding: 24px; text-align: center;">
    <h1 style="margin: 0;">Welcome to VillageTech</h1>
    <p style="margin: 10px 0 0 0;">Your Community Management Platform</p>
  </div>
  <div style="padding: 24px;">
    <h2>Hello {{ admin_name }},</h2>
    <p>Congratulations! Your community <strong>{{ tenant_name }}</strong> has been successfully set up on the VillageTech platform.</p>
    <p>You have been designated as the <strong>Admin Head</strong> for your community. Your admin portal is ready and you can access it using the credentials below.</p>
    <div style="background: #f8f9fa; border: 1px solid #dee2e6; padding: 16px;">
      <h3 style="margin-top: 0;">Your Admin Portal Access</h3>
      <p><strong>Portal URL:</strong> {{ portal_url }}</p>
      <p><strong>Subdomain:</strong> {{ subdomain }}</p>
      <p><strong>Email:</strong> {{ admin_email }}</p>
      <p><strong>Temporary Password:</strong> <code>{{ one_time_password }}</code></p>
    </div>
    <div style="background: #fff3cd; border-left: 4px solid #ffc107; padding: 12px; margin: 16px 0;">
      <strong>Important Security Notice</strong>
      <p style="margin: 8px 0 0 0;">This is a temporary password. You will be required to change it upon your first login. Please do not share it with anyone.</p>
    </div>
    <p style="text-align: center;"><a href="{{ portal_url }}" style="background: #4f46e5; color: #fff; padding: 12px 24px; text-decoration: none;">Access Your Admin Portal</a></p>
    <h3>Next Steps</h3>
    <ul>
      <li><strong>Log in</strong> to your admin portal using the credentials above</li>
      <li><strong>Change your password</strong> immediately upon first login</li>
      <li><strong>Set up Multi-Factor Authentication (MFA)</strong> for enhanced security</li>
      <li><strong>Import your community data</strong> (properties, households, gates)</li>
      <li><strong>Create admin officers</strong> to help manage your community</li>
    </ul>
    <p>Need help? Contact support@villagetech.com or visit https://docs.villagetech.com</p>
  </div>
  <div style="color: #6c757d; font-size: 12px; text-align: center; padding: 16px;">
    <p>This email was sent by VillageTech Platform. If you did not request this account, please contact support immediately.</p>
    <p>&copy; {{ year }} VillageTech. All rights reserved.</p>
  </div>
</body>
</html>
"""

TEXT_TEMPLATE = """Welcome to VillageTech - {{ tenant_name }}

Hello {{ admin_name }},

Congratulations! Your community {{ tenant_name }} has been successfully set up on the VillageTech platform.

You have been designated as the Admin Head for your community. Your admin portal is ready and you can access it using the credentials below.

YOUR ADMIN PORTAL ACCESS
------------------------
Portal URL: {{ portal_url }}
Subdomain: {{ subdomain }}
Email: {{ admin_email }}
Temporary Password: {{ one_time_password }}

IMPORTANT SECURITY NOTICE
This is a temporary password. You will be required to change it upon your first login. Please do not share it with anyone.

NEXT STEPS
1. Log in to your admin portal using the credentials above
2. Change your password immediately upon first login
3. Set up Multi-Factor Authentication (MFA) for enhanced security
4. Import your community data (properties, households, gates)
5. Create admin officers to help manage your community

Need help? Contact support@villagetech.com or visit https://docs.villagetech.com

This email was sent by VillageTech Platform. If you did not request this account, please contact support immediately.
(c) {{ year }} VillageTech. All rights reserved.
"""


class ActivationEmailRenderer:
    """Renders the admin activation email. The password appears once in each body."""

    def __init__(
        self,
        subject_template: str = SUBJECT_TEMPLATE,
        html_template: str = HTML_TEMPLATE,
        text_template: str = TEXT_TEMPLATE,
    ) -> None:
        html_env = Environment(autoescape=True, undefined=StrictUndefined)
        text_env = Environment(autoescape=False, undefined=StrictUndefined)
        self._subject = text_env.from_string(subject_template)
        self._html = html_env.from_string(html_template)
        self._text = text_env.from_string(text_template)

    def render(self, context: ActivationEmailContext) -> RenderedEmail:
        ctx = {
            "admin_name": context.admin_name,
            "admin_email": context.admin_email,
            "tenant_name": context.tenant_name,
            "subdomain": context.subdomain,
            "portal_url": context.portal_url,
            "one_time_password": context.one_time_password,
            "year": date.today().year,
        }
        return RenderedEmail(
            subject=self._subject.render(**ctx).strip(),
            html_body=self._html.render(**ctx),
            text_body=self._text.render(**ctx),
        )
