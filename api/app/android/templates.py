from __future__ import annotations

from typing import Protocol
from xml.sax.saxutils import escape as _xml_escape

from . import archive
from .models import BuildConfig, DerivedIdentity, RenderedProject

NOTIFICATIONS_PERMISSION = '<uses-permission android:name="android.permission.POST_NOTIFICATIONS" />'
MUSIC_CONTROLS_PERMISSION = '<uses-permission android:name="android.permission.MEDIA_CONTENT_CONTROL" />'

MANIFEST_TEMPLATE = """
<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package="{package_name}">

    <uses-permission android:name="android.permission.INTERNET" />
    {notifications_permission}
    {music_controls_permission}

    <application
        android:allowBackup="true"
        android:icon="@mipmap/ic_launcher"
        android:label="@string/app_name"
        android:supportsRtl="true"
        android:theme="@style/Theme.AppCompat.Light.NoActionBar"
        android:usesCleartextTraffic="true">
        <activity
            android:name=".MainActivity"
            android:exported="true"
            android:configChanges="orientation|keyboardHidden|keyboard|screenSize|locale">
            <intent-filter>
                <action android:name="android.intent.action.MAIN" />
                <category android:name="android.intent.category.LAUNCHER" />
            </intent-filter>
        </activity>
    </application>
</manifest>
""".strip()

NETWORK_SECURITY_CONFIG_TEMPLATE = """
<?xml version="1.0" encoding="utf-8"?>
<network-security-config>
    <base-config cleartextTrafficPermitted="true">
        <trust-anchors>
            <certificates src="system" />
            <certificates src="user" />
        </trust-anchors>
    </base-config>
</network-security-config>
""".strip()

MAIN_ACTIVITY_TEMPLATE = """
package {package_name};

import android.os.Bundle;
import android.webkit.WebView;
import android.webkit.WebViewClient;
import android.webkit.WebSettings;
import androidx.appcompat.app.AppCompatActivity;

public class MainActivity extends AppCompatActivity {
    private WebView webView;

    @Override
    protected void onCreate(Bundle savedInstanceState) {
        super.onCreate(savedInstanceState);
        setContentView(R.layout.activity_main);
        
        webView = findViewById(R.id.webview);
        WebSettings webSettings = webView.getSettings();
        webSettings.setJavaScriptEnabled(true);
        webSettings.setDomStorageEnabled(true);
        webSettings.setLoadWithOverviewMode(true);
        webSettings.setUseWideViewPort(true);
        webSettings.setBuiltInZoomControls(true);
        webSettings.setDisplayZoomControls(false);
        webSettings.setSupportZoom(true);
        webSettings.setDefaultTextEncodingName("utf-8");
        
        webView.setWebViewClient(new WebViewClient());
        webView.loadUrl("{website_url}");
    }

    @Override
    public void onBackPressed() {
        if (webView.canGoBack()) {
            webView.goBack();
        } else {
            super.onBackPressed();
        }
    }
}
""".strip()

LAYOUT_TEMPLATE = """
<?xml version="1.0" encoding="utf-8"?>
<RelativeLayout xmlns:android="http://schemas.android.com/apk/res/android"
    android:layout_width="match_parent"
    android:layout_height="match_parent">

    <WebView
        android:id="@+id/webview"
        android:layout_width="match_parent"
        android:layout_height="match_parent" />

</RelativeLayout>
""".strip()

STRINGS_TEMPLATE = """
<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="app_name">{app_name}</string>
</resources>
""".strip()

STYLES_TEMPLATE = """
<?xml version="1.0" encoding="utf-8"?>
<resources>
    <style name="AppTheme" parent="Theme.AppCompat.Light.NoActionBar">
        <item name="colorPrimary">#2196F3</item>
        <item name="colorPrimaryDark">#1976D2</item>
        <item name="colorAccent">#FF4081</item>
    </style>
</resources>
""".strip()

APP_BUILD_GRADLE_TEMPLATE = """
plugins {
    id 'com.android.application'
}

android {
    namespace '{package_name}'
    compileSdk 33

    defaultConfig {
        applicationId "{package_name}"
        minSdk 21
        targetSdk 33
        versionCode 1
        versionName "1.0"
    }

    buildTypes {
        release {
            minifyEnabled true
            proguardFiles getDefaultProguardFile('proguard-android-optimize.txt'), 'proguard-rules.pro'
        }
    }
    compileOptions {
        sourceCompatibility JavaVersion.VERSION_1_8
        targetCompatibility JavaVersion.VERSION_1_8
    }
}

dependencies {
    implementation 'androidx.appcompat:appcompat:1.6.1'
    implementation 'androidx.webkit:webkit:1.7.0'
}
""".strip()

SETTINGS_GRADLE_TEMPLATE = """
rootProject.name = "{app_name}"
include ':app'
""".strip()

GRADLE_WRAPPER_TEMPLATE = """
distributionBase=GRADLE_USER_HOME
distributionPath=wrapper/dists
distributionUrl=https\\://services.gradle.org/distributions/gradle-8.0-bin.zip
zipStoreBase=GRADLE_USER_HOME
zipStorePath=wrapper/dists
""".strip()


class ValueEscaper(Protocol):
    name: str

    def xml(self, value: str) -> str: ...

    def android_string(self, value: str) -> str: ...

    def java_string(self, value: str) -> str: ...

    def gradle_string(self, value: str) -> str: ...


class LiteralEscaper:
    """Inserts values verbatim. Quotes or markup in a value break the output file."""

    name = "literal"

    def xml(self, value: str) -> str:
        return value

    def android_string(self, value: str) -> str:
        return value

    def java_string(self, value: str) -> str:
        return value

    def gradle_string(self, value: str) -> str:
        return value


class MarkupEscaper:
    name = "markup"

    def xml(self, value: str) -> str:
        return _xml_escape(value, {'"': "&quot;", "'": "&apos;"})

    def android_string(self, value: str) -> str:
        # aapt rejects bare apostrophes and quotes in string resources.
        out = _xml_escape(value.replace("\\", "\\\\"))
        return out.replace("'", "\\'").replace('"', '\\"')

    def java_string(self, value: str) -> str:
        out = value.replace("\\", "\\\\").replace('"', '\\"')
        return out.replace("\n", "\\n").replace("\r", "\\r")

    def gradle_string(self, value: str) -> str:
        out = value.replace("\\", "\\\\").replace('"', '\\"').replace("'", "\\'")
        return out.replace("$", "\\$").replace("\n", "\\n")


ESCAPERS: dict[str, ValueEscaper] = {
    LiteralEscaper.name: LiteralEscaper(),
    MarkupEscaper.name: MarkupEscaper(),
}


def get_escaper(name: str) -> ValueEscaper:
    key = (name or "").strip().lower() or LiteralEscaper.name
    if key not in ESCAPERS:
        raise ValueError(f"Unknown template escaping mode '{name}' (use {', '.join(sorted(ESCAPERS))})")
    return ESCAPERS[key]


def _fill(template: str, **kwargs: str) -> str:
    out = template
    for k, v in kwargs.items():
        out = out.replace("{" + k + "}", str(v))
    return out


def render_manifest(config: BuildConfig, identity: DerivedIdentity, esc: ValueEscaper) -> str:
    return _fill(
        MANIFEST_TEMPLATE,
        package_name=esc.xml(identity.package_name),
        notifications_permission=NOTIFICATIONS_PERMISSION if config.enable_notifications else "",
        music_controls_permission=MUSIC_CONTROLS_PERMISSION if config.enable_music_controls else "",
    )


def render_main_activity(config: BuildConfig, identity: DerivedIdentity, esc: ValueEscaper) -> str:
    return _fill(
        MAIN_ACTIVITY_TEMPLATE,
        package_name=identity.package_name,
        website_url=esc.java_string(config.website_url or ""),
    )


def render(
    config: BuildConfig,
    identity: DerivedIdentity,
    icon_bytes: bytes,
    *,
    escaper: ValueEscaper | None = None,
) -> RenderedProject:
    """Render every project file for the WebView wrapper."""
    esc = escaper or ESCAPERS[LiteralEscaper.name]
    app_name = config.app_name or ""
    package_name = identity.package_name

    entries = {
        archive.SETTINGS_GRADLE: _fill(SETTINGS_GRADLE_TEMPLATE, app_name=esc.gradle_string(app_name)),
        archive.GRADLE_WRAPPER_PROPERTIES: GRADLE_WRAPPER_TEMPLATE,
        archive.APP_BUILD_GRADLE: _fill(APP_BUILD_GRADLE_TEMPLATE, package_name=esc.gradle_string(package_name)),
        archive.MANIFEST: render_manifest(config, identity, esc),
        archive.main_activity_path(package_name): render_main_activity(config, identity, esc),
        archive.LAYOUT_MAIN: LAYOUT_TEMPLATE,
        archive.VALUES_STRINGS: _fill(STRINGS_TEMPLATE, app_name=esc.android_string(app_name)),
        archive.VALUES_STYLES: STYLES_TEMPLATE,
        archive.NETWORK_SECURITY_CONFIG: NETWORK_SECURITY_CONFIG_TEMPLATE,
        archive.LAUNCHER_ICON: bytes(icon_bytes),
    }
    return RenderedProject(package_name=package_name, entries=entries)
