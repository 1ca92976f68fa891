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
import pathlib
import random
import sys

import tinct.cliargs
import tinct.colorcache
import tinct.compose
import tinct.exception
import tinct.locations
import tinct.object.palette
import tinct.renderer
import tinct.repository
import tinct.shellmode
import tinct.util
import tinct.version

USAGE = '''usage: tinct [FLAGS] COMMAND [ARG]

Commands:
    render MARKUP    Render MARKUP to stdout.
    prompt [DIR]     Render the prompt for DIR (default: current directory).
    color [DIR]      Print the palette index assigned to DIR's repository.
    palette          Render every palette entry.

Flags (environment variable used if the flag is absent):
    -s, --shell MODE   raw, zsh, bash, or auto (TINCT_SHELL, default raw)
    -w, --width N      Terminal width (TINCT_WIDTH, then COLUMNS, then stty, then 80)
    --seed N           Seed for random fill (TINCT_SEED)
    -t, --trace FILE   Trace tokens and lines to FILE (TINCT_TRACE)
    -V, --version      Print the version and exit.
    -h, --help         Print this message and exit.

Flags must precede COMMAND.'''

DEFAULT_WIDTH = 80


def command_line():
    return tinct.cliargs.CommandLine(
        USAGE,
        shell=tinct.cliargs.flag('-s', '--shell', environment='TINCT_SHELL'),
        width=tinct.cliargs.flag('-w', '--width', environment='TINCT_WIDTH'),
        seed=tinct.cliargs.flag('--seed', environment='TINCT_SEED'),
        trace=tinct.cliargs.flag('-t', '--trace', environment='TINCT_TRACE'),
        version=tinct.cliargs.boolean_flag('-V', '--version'),
        help=tinct.cliargs.boolean_flag('-h', '--help'),
        args=tinct.cliargs.anon())


# Explicit width, else COLUMNS, else the terminal, else DEFAULT_WIDTH. Determined once per invocation.
def resolve_width(explicit=None, console_width=tinct.util.console_width):
    width = tinct.util.parse_int('Width', explicit)
    if width is None:
        width = tinct.util.parse_int('COLUMNS', os.environ.get('COLUMNS', None) or None)
    if width is None:
        width = console_width()
    if width is None:
        width = DEFAULT_WIDTH
    if width <= 0:
        raise tinct.exception.ConfigurationException(f'Width must be positive: {width}')
    return width


class Main(object):

    def __init__(self, options, output=None, locations=None):
        self.shell_mode = tinct.shellmode.shell_mode(options.get('shell', None))
        self.width = resolve_width(options.get('width', None))
        self.rng = random.Random(tinct.util.parse_int('Seed', options.get('seed', None)))
        self.trace = tinct.util.Trace()
        if options.get('trace', None):
            self.trace.enable(options['trace'])
        self.output = sys.stdout if output is None else output
        self.locations = locations
        self.commands = {
            'render': self.render,
            'prompt': self.prompt,
            'color': self.color,
            'palette': self.palette
        }

    def __repr__(self):
        return f'Main({self.shell_mode}, width={self.width})'

    def run(self, args):
        if len(args) == 0:
            raise tinct.exception.ConfigurationException(f'No command specified.\n{USAGE}')
        command, args = args[0], args[1:]
        try:
            handler = self.commands[command]
        except KeyError:
            raise tinct.exception.ConfigurationException(f'Unknown command: {command}\n{USAGE}')
        self.trace.write('command', command, args)
        handler(args)

    def shutdown(self):
        self.trace.disable()

    # Commands

    def render(self, args):
        if len(args) != 1:
            raise tinct.exception.ConfigurationException('render takes one argument: MARKUP')
        self.renderer().render(args[0])

    def prompt(self, args):
        directory = self.directory(args)
        root = tinct.repository.find_root(directory)
        accent = (None if root is None else
                  tinct.object.palette.PALETTE[self.color_cache().color_index(root)])
        info = tinct.compose.PromptInfo.gather(directory, root, accent)
        self.trace.write('prompt', info)
        self.renderer().render(tinct.compose.compose(info))

    def color(self, args):
        directory = self.directory(args)
        root = tinct.repository.find_root(directory)
        if root is None:
            raise tinct.exception.ConfigurationException(f'Not in a repository: {directory}')
        print(self.color_cache().color_index(root), file=self.output)

    def palette(self, args):
        if len(args) != 0:
            raise tinct.exception.ConfigurationException('palette takes no arguments')
        lines = []
        for i, entry in enumerate(tinct.object.palette.PALETTE):
            lines.append(f'"{i:2d} "'
                         f'{tinct.compose.bubble(entry.name, ":" + entry.dim.hex())}'
                         f' {entry.bright.hex()}{tinct.compose.quote(entry.name)}0')
        self.renderer().render(tinct.compose.ROUNDED_CAPS + '|'.join(lines))

    # Internal

    def renderer(self):
        return tinct.renderer.Renderer(self.width, self.shell_mode, self.output, self.rng, self.trace)

    def color_cache(self):
        locations = tinct.locations.Locations() if self.locations is None else self.locations
        return tinct.colorcache.ColorCache(locations.colors(), trace=self.trace)

    @staticmethod
    def directory(args):
        if len(args) > 1:
            raise tinct.exception.ConfigurationException(f'Too many arguments: {" ".join(args)}')
        return pathlib.Path(args[0]).expanduser().resolve() if args else pathlib.Path.cwd()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        options = command_line().parse(argv)
        if options['help']:
            print(USAGE)
        elif options['version']:
            print(tinct.version.VERSION)
        else:
            tinct_main = Main(options)
            try:
                tinct_main.run(options['args'])
            finally:
                tinct_main.shutdown()
    except tinct.exception.KillRenderException as e:
        tinct.util.print_to_stderr(f'tinct: {e}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
