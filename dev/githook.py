import os
import sys

TARGETS = 'guildperms tests bench examples dev'

if __name__ == '__main__':
    print('Hook ran')
    python = 'py' if sys.platform == 'win32' else 'python'
    format_command = f'{python} -m ruff format {TARGETS}'
    check_command = f'{python} -m ruff check {TARGETS}'

    if os.system(format_command) == 0:
        if os.system(check_command) != 0:
            print(f'Linting failed, please run "{check_command} --fix" to fix them automatically.')
