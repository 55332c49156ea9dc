# spec_extractor/pipeline/scripts.py
"""In-page JavaScript evaluated through ``page.evaluate``.

Every script is a function expression taking a single argument, so values
such as item names are passed as data and never spliced into the source.
"""

# arg: {selector, placeholder} -> string[]
OPTIONS_SCRIPT = """
({ selector, placeholder }) => Array.from(document.querySelectorAll(selector))
    .map(el => el.textContent.trim())
    .filter(text => text !== '' && text !== placeholder)
"""

# arg: selector -> string[]
ITEM_NAMES_SCRIPT = """
(selector) => Array.from(document.querySelectorAll(selector))
    .map(el => el.textContent.trim())
"""

# arg: selector -> bool (whether a click was needed)
UNCHECK_SCRIPT = """
(selector) => {
    const checkbox = document.querySelector(selector);
    if (checkbox && checkbox.checked) {
        checkbox.click();
        return true;
    }
    return false;
}
"""

# arg: {name, nameSelector, labels: {field: label}} -> JSON string
# The last name element whose trimmed text equals `name` wins. Its parent is
# the panel holding the spec table. A row matches a label when its trimmed
# text starts with it; the value is the row's first <td>.
DETAIL_SCRIPT = """
({ name, nameSelector, labels }) => {
    const record = { name: name, error: '' };
    for (const field of Object.keys(labels)) {
        record[field] = '';
    }

    let found = null;
    for (const el of document.querySelectorAll(nameSelector)) {
        if (el.textContent.trim() === name) found = el;
    }
    if (!found) {
        record.error = 'not found';
        return JSON.stringify(record);
    }
    const panel = found.parentNode;
    if (!panel) {
        record.error = 'detail panel not found';
        return JSON.stringify(record);
    }

    const rows = Array.from(panel.querySelectorAll('tr'));
    const getSpec = (label) => {
        const row = rows.find(tr => tr.textContent.trim().startsWith(label));
        if (!row) return '';
        const cell = row.querySelector('td');
        return cell ? cell.textContent.trim() : '';
    };
    for (const [field, label] of Object.entries(labels)) {
        record[field] = getSpec(label);
    }
    return JSON.stringify(record);
}
"""
