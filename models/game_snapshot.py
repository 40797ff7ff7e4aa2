"""
GameSnapshot 모델 정의

엔진 상태 스냅샷을 소유자 키 단위로 하나씩 저장합니다.
"""
from tortoise import models, fields


class GameSnapshot(models.Model):
    """
    게임 상태 스냅샷 모델

    payload는 GameState.to_dict() 결과 (버전 포함) 를 그대로 저장합니다.
    """

    id = fields.IntField(pk=True)
    owner_key = fields.CharField(max_length=64, unique=True)
    version = fields.IntField()
    payload = fields.JSONField()
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "game_snapshot"
