"""Shell integration scripts printed by ``wtf --init <shell>``.

Each script wraps the binary in raw mode and puts the suggested command
into the shell's editing buffer instead of running it.
"""
from .errors import MissingCredential

MISSING_CREDENTIAL_EXIT = MissingCredential.exit_code

ZSH_SCRIPT = r"""# wtf shell integration for zsh
# Add to ~/.zshrc: eval "$(wtf --init zsh)"
function _wtf_run() {
    if [[ -z "$1" ]]; then
        echo "Usage: wtf <natural language prompt>"
        echo "Example: wtf show my ip address"
        return 1
    fi

    local cmd
    cmd=$(command wtf --raw "$@")
    local exit_code=$?

    if [[ $exit_code -eq %(missing)d ]]; then
        echo "To get started:"
        echo "1. Visit https://aistudio.google.com/app/apikey"
        echo "2. Create a free API key"
        echo "3. Add to your ~/.zshrc: export WTF_API_KEY='your-key-here'"
        return 1
    elif [[ $exit_code -ne 0 ]]; then
        return 1
    fi

    echo "💡 \033[36m$cmd\033[0m"
    print -z -- "$cmd"
}

alias wtf='noglob _wtf_run'
alias '??'='noglob _wtf_run'
"""

BASH_SCRIPT = r"""# wtf shell integration for bash
# Add to ~/.bashrc: eval "$(wtf --init bash)"
_wtf_run() {
    if [[ -z "$1" ]]; then
        echo "Usage: wtf <natural language prompt>"
        echo "Example: wtf show my ip address"
        return 1
    fi

    local cmd
    cmd=$(command wtf --raw "$@")
    local exit_code=$?

    if [[ $exit_code -eq %(missing)d ]]; then
        echo "To get started:"
        echo "1. Visit https://aistudio.google.com/app/apikey"
        echo "2. Create a free API key"
        echo "3. Add to your ~/.bashrc: export WTF_API_KEY='your-key-here'"
        return 1
    elif [[ $exit_code -ne 0 ]]; then
        return 1
    fi

    local edited
    read -r -e -p "$ " -i "$cmd" edited || return 1
    [[ -z "$edited" ]] && return 0
    history -s -- "$edited"
    eval -- "$edited"
}

alias wtf='_wtf_run'
"""

FISH_SCRIPT = r"""# wtf shell integration for fish
# Add to ~/.config/fish/config.fish: wtf --init fish | source
function wtf
    if test (count $argv) -eq 0
        echo "Usage: wtf <natural language prompt>"
        echo "Example: wtf show my ip address"
        return 1
    end

    set -l cmd (command wtf --raw $argv)
    set -l exit_code $status

    if test $exit_code -eq %(missing)d
        echo "To get started:"
        echo "1. Visit https://aistudio.google.com/app/apikey"
        echo "2. Create a free API key"
        echo "3. Run: set -Ux WTF_API_KEY 'your-key-here'"
        return 1
    else if test $exit_code -ne 0
        return 1
    end

    # The command stays printed above the prompt if this fish version drops
    # buffer edits made outside a key binding.
    echo (set_color cyan)"💡 $cmd"(set_color normal)
    commandline -r -- $cmd
end
"""

SCRIPTS = {
    "zsh": ZSH_SCRIPT,
    "bash": BASH_SCRIPT,
    "fish": FISH_SCRIPT,
}


def supported_shells():
    return sorted(SCRIPTS)


def render_init(shell: str) -> str:
    """Returns the integration script for ``shell``."""
    try:
        script = SCRIPTS[shell.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported shell '{shell}'. Choose one of: {', '.join(supported_shells())}"
        ) from None
    return script % {"missing": MISSING_CREDENTIAL_EXIT}
