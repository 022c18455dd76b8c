import itertools

from irishub.models import ApplicationConfig, CommandStep, TerminationResult

_pids = itertools.count(40001)


class FakeProc:
    def __init__(self, argv, **kwargs):
        self.argv = argv
        self.kwargs = kwargs
        self.pid = next(_pids)
        self.returncode = None
        self.poll_calls = 0

    def poll(self):
        self.poll_calls += 1
        return self.returncode


class FakeSpawner:
    """Stands in for subprocess.Popen and records every spawn."""

    def __init__(self, returncode=None, on_spawn=None):
        self.calls = []
        self.returncode = returncode
        self.on_spawn = on_spawn

    def __call__(self, argv, **kwargs):
        proc = FakeProc(argv, **kwargs)
        proc.returncode = self.returncode
        self.calls.append(proc)
        if self.on_spawn:
            self.on_spawn(proc)
        return proc


class FakeTerminator:
    def __init__(self, result=None, error=None):
        self.calls = []
        self.create_times = []
        self.result = result or TerminationResult(terminated=1)
        self.error = error

    def terminate(self, root_pid, create_time=None):
        self.calls.append(root_pid)
        self.create_times.append(create_time)
        if self.error:
            raise self.error
        return self.result


def make_app(app_id, working_dir, steps=(("npm install", ()), ("npm run dev", ())), name=None):
    return ApplicationConfig(
        id=app_id,
        name=name or f"App {app_id}",
        icon="react",
        working_dir=str(working_dir),
        steps=tuple(CommandStep(command=c, inputs=tuple(i)) for c, i in steps),
    )
