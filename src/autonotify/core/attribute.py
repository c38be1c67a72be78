ATTRIBUTE_NAMESPACE = "AutoNotify"
ATTRIBUTE_NAME = "NotifiablePropertyAttribute"
ATTRIBUTE_METADATA_NAME = f"{ATTRIBUTE_NAMESPACE}.{ATTRIBUTE_NAME}"
ATTRIBUTE_SOURCE_KEY = "AutoNotifyAttribute"
ATTRIBUTE_SOURCE_PATH = f"{ATTRIBUTE_SOURCE_KEY}.g.cs"

PROPERTY_NAME_ARGUMENT = "PropertyName"

NOTIFY_METADATA_NAME = "System.ComponentModel.INotifyPropertyChanged"

ATTRIBUTE_SOURCE = f"""// <auto-generated/>
using System;

namespace {ATTRIBUTE_NAMESPACE}
{{
    /// <summary>
    /// Generates a property raising PropertyChanged for the annotated field.
    /// </summary>
    [AttributeUsage(AttributeTargets.Field, Inherited = false, AllowMultiple = false)]
    sealed class {ATTRIBUTE_NAME} : Attribute
    {{
        public {ATTRIBUTE_NAME}() {{ }}

        /// <summary>
        /// Name of the generated property. Derived from the field name when not set.
        /// </summary>
        public string {PROPERTY_NAME_ARGUMENT} {{ get; set; }}
    }}
}}
"""
