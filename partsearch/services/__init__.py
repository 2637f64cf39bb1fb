"""비즈니스 로직 서비스 - 각 모듈을 직접 import해서 사용합니다."""
