"""여러 서비스가 공유하는 로깅, 미들웨어, KV 스토어, MongoDB 유틸."""
