"""
Soloist 커스텀 예외 클래스 정의

모든 예외는 SoloistError를 상속받아 일관된 에러 처리를 제공합니다.
규칙 위반(RuleViolationError)은 엔진 경계에서 CommandResult로 변환되며
호출자에게 예외로 전달되지 않습니다.
"""
from service.state.enums import FailureReason


class SoloistError(Exception):
    """Soloist 기본 예외 클래스"""

    def __init__(self, message: str = "알 수 없는 오류가 발생했습니다"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# 규칙 위반 (명령 거부)
# =============================================================================


class RuleViolationError(SoloistError):
    """비즈니스 규칙 위반 기본 예외"""

    reason: FailureReason = FailureReason.INVALID_TRANSITION


class InvalidTransitionError(RuleViolationError):
    """허용되지 않는 상태 전이"""

    reason = FailureReason.INVALID_TRANSITION

    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"{action}할 수 없습니다: {detail}")


class QuotaExceededError(RuleViolationError):
    """일일 한도 초과"""

    reason = FailureReason.QUOTA_EXCEEDED

    def __init__(self, quota_name: str, limit: int):
        self.quota_name = quota_name
        self.limit = limit
        super().__init__(f"오늘의 {quota_name} 한도({limit})를 모두 사용했습니다.")


class SideQuestsLockedError(RuleViolationError):
    """사이드 퀘스트 잠금 상태"""

    reason = FailureReason.SIDE_QUESTS_LOCKED

    def __init__(self, locked_until):
        self.locked_until = locked_until
        super().__init__(f"사이드 퀘스트가 잠겨 있습니다. (해제: {locked_until:%Y-%m-%d %H:%M})")


class InvalidArgumentError(RuleViolationError):
    """잘못된 입력값"""

    reason = FailureReason.INVALID_ARGUMENT

    def __init__(self, field_name: str, detail: str):
        self.field_name = field_name
        self.detail = detail
        super().__init__(f"'{field_name}' 값이 올바르지 않습니다: {detail}")


# =============================================================================
# 조회 실패
# =============================================================================


class QuestNotFoundError(RuleViolationError):
    """퀘스트를 찾을 수 없음"""

    reason = FailureReason.NOT_FOUND

    def __init__(self, quest_id: str):
        self.quest_id = quest_id
        super().__init__(f"퀘스트를 찾을 수 없습니다: {quest_id}")


class TaskNotFoundError(RuleViolationError):
    """작업을 찾을 수 없음"""

    reason = FailureReason.NOT_FOUND

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"작업을 찾을 수 없습니다: {task_id}")


class RewardNotFoundError(RuleViolationError):
    """해당 날짜에 설정된 보상이 없음"""

    reason = FailureReason.NOT_FOUND

    def __init__(self, day):
        self.day = day
        super().__init__(f"{day} 에 설정된 보상이 없습니다")


# =============================================================================
# 저장소 관련 예외
# =============================================================================


class PersistenceUnavailableError(SoloistError):
    """저장소에 접근할 수 없음"""

    def __init__(self, backend: str, detail: str = ""):
        self.backend = backend
        self.detail = detail
        super().__init__(f"{backend} 저장소를 사용할 수 없습니다. {detail}".strip())


class SnapshotVersionError(SoloistError):
    """지원하지 않는 스냅샷 버전"""

    def __init__(self, found, expected: int):
        self.found = found
        self.expected = expected
        super().__init__(f"지원하지 않는 스냅샷 버전입니다. (예상: {expected}, 현재: {found})")
