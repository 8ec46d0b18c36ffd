class InvalidArnError(Exception):
    pass


def get_account_uid_from_arn(arn: str) -> str:
    # arn:aws:iam::12345:user/user-1 --> 12345
    parts = arn.split(":")
    if len(parts) < 6 or parts[0] != "arn" or not parts[4]:
        raise InvalidArnError(f"'{arn}' is not a valid ARN")
    return parts[4]
