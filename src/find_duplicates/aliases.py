from find_duplicates.services.duplicate_service import KeepStrategy

KEEP_ALIASES = {
    "first": KeepStrategy.FIRST,
    "newest": KeepStrategy.NEWEST,
    "oldest": KeepStrategy.OLDEST,
}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Keep one file per duplicate group and delete the rest:\n"
    "  first  : Keep the first file listed in each group\n"
    "  newest : Keep the most recently modified file\n"
    "  oldest : Keep the least recently modified file\n"
    "Example  : %(prog)s -i ~/Downloads --keep newest"
)

EXCLUDE_PATTERNS_HELP_TEXT = (
    "Glob patterns (space separated) matched against full paths.\n"
    "'*' also matches '/', so '*/build' skips every 'build' directory.\n"
    "Example  : %(prog)s -i ~/src -x '*/build' '*.o'"
)

EPILOG_TEXT = """
Examples:
  Basic usage - find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Search two trees, skipping small files and build output
  %(prog)s -i ~/photos /mnt/backup/photos -m 100K -x '*/thumbnails'

  Only the top level of a directory
  %(prog)s -i ~/Downloads --no-recurse

  Move all but the newest copy to trash (with confirmation prompt)
  %(prog)s -i ~/Downloads --keep newest

  Same as above but without confirmation, for scripts
  %(prog)s -i ~/Downloads --keep newest --force > ~/report.txt

  Save the list of duplicate paths
  %(prog)s -i ~/Downloads --save ~/duplicates.txt

Built-in exclusions (disable with --no-default-excludes):
  /lost+found /dev /proc /sys /tmp
  */.svn */CVS */.git */.hg */.bzr */node_modules */target
"""
