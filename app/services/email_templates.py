"""Plain-text transactional email templates.

Each template is a (subject, body) pair of ``str.format`` strings rendered
against the notification data bag. Missing keys render as empty strings.
"""
from collections import defaultdict

TEMPLATES: dict[str, tuple[str, str]] = {
    "welcomeEmail": (
        "Welcome to TourBirth",
        "Hi {firstName},\n\nThank you for signing up! We're excited to have you on board.\n"
        "Your verification code is: {otp}\n\nGet started: {frontendUrl}",
    ),
    "adminWelcome": (
        "Welcome Admin",
        "Hi {firstName},\n\nYour TourBirth admin account has been created.\n\nSign in: {frontendUrl}",
    ),
    "accountVerification": (
        "Verify Your Account",
        "Your One-Time Password (OTP) to verify your account is: {otp}\n"
        "It expires in {expiresMinutes} minutes.",
    ),
    "passwordReset": (
        "Password Reset Request",
        "Your One-Time Password (OTP) to reset your password is: {otp}\n"
        "It expires in {expiresMinutes} minutes. If you did not ask for this, ignore this email.",
    ),
    "companionWelcome": (
        "Welcome to TourBirth - Trip Companion",
        "Hi {companionName},\n\n{primaryName} added you as a travel companion.\n\n"
        "Package: {packageName}\nBooking: {bookingId}\nDestination: {destination}\n"
        "Travel date: {travelDate}\n{description}\n\n"
        "Sign in with\n  Email: {email}\n  Temporary password: {tempPassword}\n"
        "and complete your registration at {frontendUrl}/companion/complete-registration",
    ),
    "companionAdded": (
        "You have been added to a trip on TourBirth",
        "Hi {companionName},\n\n{primaryName} added you as a travel companion.\n\n"
        "Package: {packageName}\nBooking: {bookingId}\nDestination: {destination}\n"
        "Travel date: {travelDate}\n\nSign in with your existing account at {frontendUrl}",
    ),
    "bookingStatusChanged": (
        "Your TourBirth booking {bookingId} is now {status}",
        "Hi {name},\n\nThe status of booking {bookingId} ({packageName}) changed to {status}.",
    ),
    "waitlistConfirmation": (
        "Welcome to the TourBirth Waitlist!",
        "Hi {name},\n\nYou're on the list for {tripType}. We'll be in touch soon.\n\n{frontendUrl}",
    ),
    "waitlistNotification": (
        "New Waitlist Entry - TourBirth",
        "Name: {name}\nEmail: {email}\nPhone: {phoneNumber}\nTrip type: {tripType}\n"
        "Additional information: {additionalInformation}",
    ),
    "newsletterConfirmation": (
        "Welcome to the TourBirth Newsletter!",
        "You're subscribed with {email}. Travel stories and deals are on their way.\n\n{frontendUrl}",
    ),
    "newsletterNotification": (
        "New Newsletter Subscription - TourBirth",
        "New subscriber: {email}",
    ),
    "contactConfirmation": (
        "Thank you for contacting TourBirth!",
        "Hi {fullName},\n\nWe received your story about {dreamDestination} and will reply shortly.",
    ),
    "contactNotification": (
        "New Contact Form Submission - TourBirth",
        "Name: {fullName}\nEmail: {email}\nDream destination: {dreamDestination}\n"
        "Travel date: {travelDate}\n\n{story}",
    ),
}


def render(template: str, data: dict) -> tuple[str, str]:
    if template not in TEMPLATES:
        raise KeyError(f"unknown email template: {template}")
    subject, body = TEMPLATES[template]
    bag = defaultdict(str, {k: ("" if v is None else v) for k, v in data.items()})
    return subject.format_map(bag), body.format_map(bag)
