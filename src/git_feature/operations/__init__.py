from git_feature.operations.config import ToolConfig, load_config

from .executor import GitExecutor
from .state import StateStore, JsonStateStore, MemoryStateStore
from .prompts import Prompter, ClickPrompter
from .assembler import ReleaseAssembler, ReleaseOutcome
from .publisher import PullRequestPublisher, PullRequestRecord, PullRequestRequest
