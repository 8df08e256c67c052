"""
Stealth Patches for Playwright

Detection vectors checked by the Cloudflare challenge in front of the
listing site, and the patches that hide them.
"""

# Injected into every document before any page script runs
STEALTH_JS = """
// 1. navigator.webdriver: the launch flag removes it; only patch if it leaked
if (navigator.webdriver) {
    Object.defineProperty(navigator, 'webdriver', {
        get: () => false,
        configurable: true
    });
}

// 2. window.chrome exists in real Chrome
if (!window.chrome) {
    window.chrome = {};
}
if (!window.chrome.runtime) {
    window.chrome.runtime = {
        connect: () => {},
        sendMessage: () => {},
        id: undefined
    };
}

// 3. Notifications permission must agree with Notification.permission
if (navigator.permissions && navigator.permissions.query) {
    const originalQuery = navigator.permissions.query.bind(navigator.permissions);
    navigator.permissions.query = (parameters) => {
        if (parameters && parameters.name === 'notifications') {
            return Promise.resolve({ state: Notification.permission, onchange: null });
        }
        return originalQuery(parameters);
    };
}

// 4. Headless reports an empty plugin list
if (navigator.plugins.length === 0) {
    Object.defineProperty(navigator, 'plugins', {
        get: () => {
            const plugins = [
                { name: 'Chrome PDF Plugin', filename: 'internal-pdf-viewer', description: 'Portable Document Format', length: 1 },
                { name: 'Chrome PDF Viewer', filename: 'mhjfbmdgcfjbbpaeojofohoefgiehjai', description: '', length: 1 },
            ];
            plugins.item = (index) => plugins[index] || null;
            plugins.namedItem = (name) => plugins.find(p => p.name === name) || null;
            plugins.refresh = () => {};
            return plugins;
        },
        configurable: true
    });
}

// 5. Languages must match the Accept-Language header
Object.defineProperty(navigator, 'languages', {
    get: () => ['en-US', 'en'],
    configurable: true
});

// 6. Automation globals left by drivers
const automationProps = ['__webdriver_evaluate', '__selenium_evaluate', '__webdriver_script_fn',
                         '__driver_evaluate', '__webdriver_unwrapped', '__driver_unwrapped',
                         '_selenium', 'callSelenium', 'callPhantom', '_phantom', '__nightmare'];
for (const prop of automationProps) {
    delete window[prop];
    delete document[prop];
}
for (const prop of Object.keys(window).filter(k => k.startsWith('cdc_'))) {
    delete window[prop];
}
"""

USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) '
    'AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/120.0.0.0 Safari/537.36'
)

EXTRA_HEADERS = {
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
}

VIEWPORT = {'width': 1920, 'height': 1080}


def get_stealth_args():
    """Chrome launch arguments for the challenge-protected listing site."""
    return [
        '--no-sandbox',
        '--disable-setuid-sandbox',
        '--disable-blink-features=AutomationControlled',  # removes webdriver traces
        '--disable-dev-shm-usage',
        '--disable-web-security',
        '--disable-features=IsolateOrigins,site-per-process',
        '--disable-infobars',
        f"--window-size={VIEWPORT['width']},{VIEWPORT['height']}",
    ]
