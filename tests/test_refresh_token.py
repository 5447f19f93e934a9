"""리프레시 자격 증명 유틸리티 테스트."""

from app.utils.refresh_token import hash_verifier, issue_credential, split_credential, verify_credential


class TestRefreshCredential:
    def test_issue_and_verify(self):
        cred = issue_credential()
        selector, verifier = split_credential(cred.token)
        assert selector == cred.selector
        assert verifier not in cred.verifier_hash
        assert verify_credential(verifier, cred.salt, cred.verifier_hash)

    def test_wrong_verifier_fails(self):
        cred = issue_credential()
        assert not verify_credential("not-the-verifier", cred.salt, cred.verifier_hash)

    def test_salt_changes_hash(self):
        assert hash_verifier("a", "verifier") != hash_verifier("b", "verifier")

    def test_tokens_are_unique(self):
        assert issue_credential().token != issue_credential().token

    def test_split_rejects_malformed(self):
        """형식 오류 토큰은 None."""
        assert split_credential("no-dot") is None
        assert split_credential(".verifier") is None
        assert split_credential("selector.") is None
        assert split_credential("a.b.c") is None
