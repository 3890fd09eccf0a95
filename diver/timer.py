# timer.py
class OneShotTimer:
    """Countdown that runs once per ``start`` and is advanced by the caller.

    Time only moves when ``tick`` is called, so it follows the fixed physics
    step rather than wall-clock time.
    """

    def __init__(self, wait_time):
        self.wait_time = float(wait_time)
        self.elapsed = 0.0
        self.running = False

    def start(self, wait_time=None):
        if wait_time is not None:
            self.wait_time = float(wait_time)
        self.elapsed = 0.0
        self.running = True

    def stop(self):
        self.running = False

    def tick(self, delta):
        if not self.running:
            return
        self.elapsed += delta
        if self.elapsed >= self.wait_time:
            self.running = False

    @property
    def time_left(self):
        if not self.running:
            return 0.0
        return max(0.0, self.wait_time - self.elapsed)

    def is_stopped(self):
        return not self.running
