"""
Verification code generation and the message that carries it.
"""

import secrets

CODE_LENGTH = 6


def generate_verification_code() -> str:
    """
    Generate a 6-digit one-time verification code.

    Uniform over 000000-999999 using the secrets CSPRNG.
    Returns string to preserve leading zeros.
    """
    return f"{secrets.randbelow(10**CODE_LENGTH):0{CODE_LENGTH}d}"


def build_verification_message(code: str, ttl_seconds: int, product_name: str) -> tuple[str, str]:
    """
    Build the subject and plaintext body of a verification email.

    Returns:
        Tuple of (subject, body)
    """
    minutes = max(1, ttl_seconds // 60)
    unit = "minute" if minutes == 1 else "minutes"
    subject = f"Your {product_name} verification code"
    body = (
        "Hi,\n\n"
        f"Your {product_name} verification code is: {code}\n"
        f"It expires in {minutes} {unit}.\n\n"
        "If you did not request this code you can ignore this email.\n"
    )
    return subject, body
