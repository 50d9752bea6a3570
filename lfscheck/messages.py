from termcolor import colored

###############################################################################
# Output prefixes
###############################################################################

CHECKMARK    = '[' + colored("✓", "green") + ']'
CROSSMARK    = '[' + colored("✗", "red") + ']'
QUESTIONMARK = '[' + colored("?", "yellow") + ']'
INFOMARK     = '[' + colored("i", "blue") + ']'

def _message(prefix: str, raw_prefix: str, *args):
    msg = '\n'.join(str(arg) for arg in args)
    first = True
    for line in msg.split('\n'):
        if first: print(f"{prefix} {line}")
        else:     print(f"{' ' * len(raw_prefix)} {line}")
        first = False

# Use CROSSMARK for errors
def error(*msg): _message(CROSSMARK, '[✗]', *msg)

# Use QUESTIONMARK for warnings
def warning(*msg): _message(QUESTIONMARK, '[?]', *msg)

# Use INFOMARK for information
def info(*msg): _message(INFOMARK, '[i]', *msg)

# Use CHECKMARK for success
def success(*msg): _message(CHECKMARK, '[✓]', *msg)


###############################################################################
# GitHub Actions workflow commands
###############################################################################

def _escape_data(value: str) -> str:
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')

def _escape_property(value: str) -> str:
    return _escape_data(value).replace(':', '%3A').replace(',', '%2C')

def annotate(level: str, message: str, file: str | None = None) -> None:
    """
    Prints a workflow command (``::error file=a.png::msg``) that the GitHub
    runner turns into an annotation on the offending file.
    """
    if level not in ("error", "warning", "notice"):
        raise ValueError(f"Invalid annotation level: {level}")
    props = f" file={_escape_property(file)}" if file is not None else ""
    print(f"::{level}{props}::{_escape_data(message)}")
