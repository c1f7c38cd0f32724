import shlex
import subprocess
from typing import List, Tuple, Union

from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)


def run_shell(command: Union[str, List[str]], do_not_log=False) -> Tuple[str, str, int]:
    '''
    Run shell command and get stdout, stderr and statuscode in output.

    Raises FileNotFoundError when the executable itself is missing.
    '''
    if isinstance(command, str):
        command = shlex.split(command)
    logger.debug("Running command: %s", shlex.join(command))
    process = subprocess.Popen(
        command, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True
    )
    stdout, stderr = process.communicate()
    if not do_not_log:
        for line in stdout.splitlines():
            logger.debug("%s", line.rstrip())
    if stderr.strip():
        logger.debug("stderr: %s", stderr.strip())
    logger.debug("Run Status: %d", process.returncode)
    return stdout, stderr, process.returncode
