"""
출결 정산 도메인 (순수 파이썬).

timeutil → exception_calendar → schedule → classifier → aggregator
"""
