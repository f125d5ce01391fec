import bcrypt


class PasswordEncoder:
    """bcrypt 기반 단방향 비밀번호 해시 (salt는 해시 문자열에 포함됨)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, raw_password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(raw_password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, raw_password: str, password_hash: str) -> bool:
        if not raw_password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(
                raw_password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except ValueError:
            # 손상된 해시 또는 72바이트를 넘는 입력
            return False
