"""설정 및 예외 정의."""
