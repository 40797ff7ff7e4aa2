"""인메모리 게임 상태 모델 (User + Quest + Task + Penalty 집합체)"""
