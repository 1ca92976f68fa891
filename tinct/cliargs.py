# This file is part of tinct.
#
# tinct is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# tinct is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with tinct.  If not, see <https://www.gnu.org/licenses/>.

import os

from tinct.exception import ConfigurationException

# Command line arguments, declared as keyword arguments of CommandLine:
#
#     CommandLine(USAGE,
#                 width=flag('-w', '--width', environment='TINCT_WIDTH'),
#                 verbose=boolean_flag('-v'),
#                 args=anon())
#
# parse() returns a dict mapping each keyword to its value. A flag's value comes from the command line
# if present, else from its environment variable, else its default.


class Arg(object):

    def __init__(self, default=None, environment=None):
        self.var = None
        self.default = default
        self.environment = environment

    def flags(self):
        return ()

    def is_anon(self):
        return False

    def is_boolean(self):
        return False

    def initial_value(self):
        value = os.environ.get(self.environment, '') if self.environment else ''
        return self.default if value == '' else self.environment_value(value)

    def environment_value(self, value):
        return value


class AnonArg(Arg):

    def __repr__(self):
        return 'anon()'

    def is_anon(self):
        return True

    def initial_value(self):
        return []


class FlagArg(Arg):

    def __init__(self, f1, f2=None, default=None, environment=None):
        super().__init__(default, environment)
        names = [f for f in (f1, f2) if f is not None]
        for f in names:
            FlagArg.check_valid_flag(f)
        if len(names) == 2 and FlagArg.is_long(names[0]) == FlagArg.is_long(names[1]):
            raise ConfigurationException(
                f'If two flags are specified, one must be long and one must be short: {f1}, {f2}')
        self.names = tuple(names)

    def __repr__(self):
        return '|'.join(self.names)

    def flags(self):
        return self.names

    @staticmethod
    def is_long(f):
        return f.startswith('--')

    @staticmethod
    def check_valid_flag(f):
        if not f.startswith('-') or len(f.lstrip('-')) == 0 or len(f) - len(f.lstrip('-')) > 2:
            raise ConfigurationException(f'Invalid flag: {f}')


class BooleanFlagArg(FlagArg):

    TRUE = ('1', 'true', 'yes', 'on')

    def __init__(self, f1, f2=None, default=False, environment=None):
        super().__init__(f1, f2, default, environment)

    def is_boolean(self):
        return True

    def environment_value(self, value):
        return value.lower() in BooleanFlagArg.TRUE


# Flags come first. The first argument that isn't a flag, and everything after it, goes to the anon arg.
# -- ends the flags explicitly.
class CommandLine(object):

    END_OF_FLAGS = '--'

    def __init__(self, usage, **var_arg):
        self.usage = usage
        self.var_arg = var_arg
        self.flag_arg = {}
        self.anon = None
        for var, arg in var_arg.items():
            if not isinstance(arg, Arg):
                raise ConfigurationException(f'Arg value must be flag(), boolean_flag(), or anon(): {arg}')
            arg.var = var
            if arg.is_anon():
                if self.anon is not None:
                    raise ConfigurationException('Too many anon() specified.')
                self.anon = arg
            for f in arg.flags():
                if f in self.flag_arg:
                    raise ConfigurationException(f'Duplicated flag: {f}')
                self.flag_arg[f] = arg

    def parse(self, argv):
        values = {var: arg.initial_value() for var, arg in self.var_arg.items()}
        argv = list(argv)
        a = 0
        while a < len(argv) and CommandLine.is_flag(argv[a]):
            token = argv[a]
            a += 1
            if token == CommandLine.END_OF_FLAGS:
                break
            arg = self.flag_arg.get(token, None)
            if arg is None:
                self.report_error(f'Unrecognized flag: {token}')
            if arg.is_boolean():
                values[arg.var] = True
            elif a == len(argv) or CommandLine.is_flag(argv[a]):
                self.report_error(f'Value missing for flag: {token}')
            else:
                values[arg.var] = argv[a]
                a += 1
        rest = argv[a:]
        if self.anon is not None:
            values[self.anon.var] = rest
        elif rest:
            self.report_error(f'Unexpected arguments: {" ".join(rest)}')
        return values

    def report_error(self, message):
        if self.usage:
            message = f'{message}\n{self.usage}'
        raise ConfigurationException(message)

    @staticmethod
    def is_flag(token):
        return token.startswith('-') and len(token) > 1


def flag(f1, f2=None, default=None, environment=None):
    return FlagArg(f1, f2, default=default, environment=environment)


def boolean_flag(f1, f2=None, default=False, environment=None):
    return BooleanFlagArg(f1, f2, default=default, environment=environment)


def anon():
    return AnonArg()
