# spec_extractor/delegates/__init__.py

# This file makes the delegate classes directly available from the 'delegates' package.
# Instead of: from spec_extractor.delegates.browser_delegate import BrowserDelegate
# We can now use: from spec_extractor.delegates import BrowserDelegate

from .action_executor import ActionExecutor
from .browser_delegate import BrowserDelegate
from .file_manager_delegate import FileManagerDelegate
