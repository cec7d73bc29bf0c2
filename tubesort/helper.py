def fPercent(num: float, den: float, roundDigits=1) -> str:
  if not den: return "--%"
  return f"{round(num / den * 100, roundDigits)}%"
def fRate(count: int, seconds: float) -> str:
  '''Printable "per second" rate, or dashes when no measurable time has passed'''
  if seconds <= 0: return "--/s"
  return f"{round(count / seconds)}/s"
def getTimeRunning(startTime: float, endTime: float) -> tuple[float, float]: # (seconds, minutes)
  elapsed = endTime - startTime
  return (round(elapsed, 1), round(elapsed / 60, 1))
